#!/usr/bin/env python3
"""
Print today's standup from Notion as Slack-flavored markdown.

Usage:
    daily-standup [--config CONFIG] [--date YYYY-MM-DD] [--sotd-section]

Sections (in order):
    Previous, Today, Blockers, Gratitude/Joy/Others

Options:
    --config        Path to config file (default: config.yaml or env vars)
    --date          Build the standup for another day (default: today)
    --sotd-section  Print the song of the day as a fifth section instead of
                    exposing it to entries as {{sotd}}

Example:
    daily-standup
    daily-standup --date 2024-03-04 --sotd-section
"""

import sys
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

from .config import load_config, ConfigurationError
from .standup import DailyStandup

# Set up logging
logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for command-line usage."""
    args = sys.argv[1:] if argv is None else argv

    # Parse arguments
    config_file = None
    today = None
    sotd_section = False

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in ('-h', '--help'):
            print(__doc__)
            return 0
        elif arg == '--config':
            if i + 1 < len(args):
                config_file = Path(args[i + 1])
                i += 1
            else:
                print("Error: --config requires a file path")
                return 1
        elif arg == '--date':
            if i + 1 < len(args):
                try:
                    today = date.fromisoformat(args[i + 1])
                except ValueError:
                    print(f"Error: Invalid date: {args[i + 1]} (expected YYYY-MM-DD)")
                    return 1
                i += 1
            else:
                print("Error: --date requires a date")
                return 1
        elif arg == '--sotd-section':
            sotd_section = True
        else:
            print(f"Error: Unexpected argument: {arg}")
            print(__doc__)
            return 1

        i += 1

    # Load configuration
    try:
        config = load_config(config_file)
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 1

    # Set up logging
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format=config.log_format
    )

    # Fetch everything before printing so a failure never leaves a partial standup
    try:
        standup = DailyStandup.from_notion(
            config, today=today, sotd_in_context=not sotd_section
        )
        blocks = standup.sections(include_sotd=sotd_section)
    except Exception as e:
        logger.error(f"Standup failed: {e}", exc_info=True)
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1

    for block in blocks:
        # No blank line after blocks that already end in a newline
        print(block, end='' if block.endswith('\n') else '\n')

    return 0


if __name__ == "__main__":
    sys.exit(main())
