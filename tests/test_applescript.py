"""Tests for osascript execution and escaping."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from window_switcher.exceptions import AppleScriptError
from window_switcher.utils import AppleScriptExecutor, escape_applescript_string


def test_escape_backslash_and_quote() -> None:
    assert escape_applescript_string('a\\b"c') == 'a\\\\b\\"c'


def test_escape_control_characters() -> None:
    assert escape_applescript_string("a\nb\tc\r") == "a\\nb\\tc\\r"


def test_applescript_command_line() -> None:
    completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="ok\n", stderr="")
    with patch("window_switcher.utils.applescript.subprocess.run", return_value=completed) as run:
        result = AppleScriptExecutor(timeout=3).execute('return "ok"')
    assert result == (True, "ok", None)
    assert run.call_args[0][0] == ["osascript", "-e", 'return "ok"']
    assert run.call_args[1]["timeout"] == 3


def test_javascript_command_line() -> None:
    completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="[]", stderr="")
    with patch("window_switcher.utils.applescript.subprocess.run", return_value=completed) as run:
        AppleScriptExecutor().execute_javascript("JSON.stringify([])")
    assert run.call_args[0][0] == ["osascript", "-l", "JavaScript", "-e", "JSON.stringify([])"]


def test_non_zero_exit_is_a_failure() -> None:
    completed = subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="boom\n")
    with patch("window_switcher.utils.applescript.subprocess.run", return_value=completed):
        assert AppleScriptExecutor().execute("x") == (False, None, "boom")


def test_timeout_is_a_failure() -> None:
    with patch(
        "window_switcher.utils.applescript.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="osascript", timeout=2),
    ):
        success, stdout, stderr = AppleScriptExecutor(timeout=2).execute("x")
    assert success is False
    assert "timed out" in stderr


def test_missing_osascript_is_a_failure() -> None:
    with patch("window_switcher.utils.applescript.subprocess.run", side_effect=FileNotFoundError("osascript")):
        success, _, stderr = AppleScriptExecutor().execute("x")
    assert success is False
    assert "osascript" in stderr


def test_execute_or_raise_carries_stderr() -> None:
    executor = AppleScriptExecutor()
    executor.execute = MagicMock(return_value=(False, None, "Not authorized"))
    with pytest.raises(AppleScriptError) as excinfo:
        executor.execute_or_raise("x")
    assert excinfo.value.stderr == "Not authorized"
    assert "Not authorized" in str(excinfo.value)
