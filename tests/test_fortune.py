import os
import random
import subprocess
from unittest.mock import patch

import pytest

from notion_standup import fortune
from notion_standup.fortune import FALLBACK_FORTUNES, clean_fortune, random_fortune, which


def make_executable(directory, name):
    path = directory / name
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


@pytest.mark.skipif(os.name == "nt", reason="relies on POSIX permissions")
def test_which_finds_executable_files_only(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "fortune").write_text("not executable")
    (first / "fortune").chmod(0o644)
    expected = make_executable(second, "fortune")
    search_path = os.pathsep.join([str(first), str(second)])

    assert which("fortune", path=search_path, pathext="") == str(expected)


@pytest.mark.skipif(os.name == "nt", reason="relies on POSIX permissions")
def test_which_skips_directories_and_tries_extensions(tmp_path):
    (tmp_path / "fortune").mkdir()
    expected = make_executable(tmp_path, "fortune.exe")

    assert which("fortune", path=str(tmp_path), pathext=".bat;.exe") == str(expected)
    assert which("fortune", path=str(tmp_path), pathext="") is None


def test_which_with_empty_path():
    assert which("fortune", path="", pathext="") is None


def test_clean_fortune_puts_text_on_one_line():
    assert clean_fortune("  A wise\nman\tonce\r\nsaid  \n") == "A wise man once  said"


def test_fallback_when_fortune_is_missing():
    with patch.object(fortune, "which", return_value=None):
        assert random_fortune(random.Random(1)) in FALLBACK_FORTUNES


def test_fallback_choice_is_uniform_over_list():
    rng = random.Random(7)
    with patch.object(fortune, "which", return_value=None):
        seen = {random_fortune(rng) for _ in range(200)}

    assert seen == set(FALLBACK_FORTUNES)


def test_runs_fortune_with_wisdom_file():
    completed = subprocess.CompletedProcess(
        ["/usr/games/fortune", "-s", "wisdom"], 0, stdout="Know\nthyself.\n", stderr=""
    )
    with patch.object(fortune, "which", return_value="/usr/games/fortune"), \
            patch.object(fortune.subprocess, "run", return_value=completed) as run:
        assert random_fortune() == "Know thyself."

    assert run.call_args[0][0] == ["/usr/games/fortune", "-s", "wisdom"]


def test_fortune_failure_falls_back():
    error = subprocess.CalledProcessError(1, ["fortune"], stderr="No fortunes found")
    with patch.object(fortune, "which", return_value="/usr/games/fortune"), \
            patch.object(fortune.subprocess, "run", side_effect=error):
        assert random_fortune() in FALLBACK_FORTUNES

    with patch.object(fortune, "which", return_value="/usr/games/fortune"), \
            patch.object(fortune.subprocess, "run", side_effect=OSError("exec format error")):
        assert random_fortune() in FALLBACK_FORTUNES


def test_empty_fortune_output_falls_back():
    completed = subprocess.CompletedProcess(
        ["/usr/games/fortune", "-s", "wisdom"], 0, stdout="  \n", stderr=""
    )
    with patch.object(fortune, "which", return_value="/usr/games/fortune"), \
            patch.object(fortune.subprocess, "run", return_value=completed):
        assert random_fortune() in FALLBACK_FORTUNES


@pytest.mark.skipif(os.name == "nt", reason="relies on a POSIX shell script")
def test_undecodable_fortune_output_does_not_raise(tmp_path, monkeypatch):
    script = tmp_path / "fortune"
    script.write_text("#!/bin/sh\nprintf '\\377\\376 caf\\351\\n'\n")
    script.chmod(0o755)
    monkeypatch.setenv("PATH", str(tmp_path))
    monkeypatch.delenv("PATHEXT", raising=False)

    result = random_fortune()

    assert "caf" in result
    assert "\n" not in result
