"""
A little quote for the standup, from the `fortune` program when installed.

Install it with `brew install fortune` or `apt install fortune-mod`.
"""

import logging
import os
import random
import re
import subprocess
from typing import List, Optional

logger = logging.getLogger(__name__)

FORTUNE_COMMAND = "fortune"
FORTUNE_ARGS = ["-s", "wisdom"]

FALLBACK_FORTUNES = [
    "You must make your own fortune",
    "Fortune favors the prepared mind. -- Louis Pasteur",
    "Fortune always favors the brave, and never helps a man who does not help himself -- PT Barnum",
    "Any fool can write code that a computer can understand. "
    "Good programmers write code that humans can understand. -- Martin Fowler",
]


def which(cmd: str, path: Optional[str] = None, pathext: Optional[str] = None) -> Optional[str]:
    """
    Find an executable on the search path.

    Args:
        cmd: Command name without extension
        path: Search path (defaults to PATH)
        pathext: ';'-separated extensions to try (defaults to PATHEXT)

    Returns:
        Full path of the first executable regular file found, or None
    """
    if path is None:
        path = os.environ.get("PATH", "")
    if pathext is None:
        pathext = os.environ.get("PATHEXT")
    exts: List[str] = pathext.split(";") if pathext else [""]

    for directory in path.split(os.pathsep):
        if not directory:
            continue
        for ext in exts:
            exe = os.path.join(directory, f"{cmd}{ext}")
            if os.path.isfile(exe) and os.access(exe, os.X_OK):
                return exe
    return None


def clean_fortune(text: str) -> str:
    """Put a multi-line fortune on one line."""
    return re.sub(r"[\n\t\r]", " ", text.strip())


def random_fortune(rng: Optional[random.Random] = None) -> str:
    """Return a fortune, falling back to a built-in quote."""
    rng = rng or random
    exe = which(FORTUNE_COMMAND)
    if exe:
        try:
            result = subprocess.run(
                [exe] + FORTUNE_ARGS,
                capture_output=True,
                text=True,
                errors="replace",
                check=True,
            )
            fortune = clean_fortune(result.stdout)
            if fortune:
                return fortune
            logger.debug("fortune produced no output")
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"fortune failed: {e}")
    else:
        logger.debug("fortune not found on PATH, using a built-in quote")

    return rng.choice(FALLBACK_FORTUNES)
