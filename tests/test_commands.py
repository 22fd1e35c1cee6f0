"""Tests for routing action verbs to commands."""

from unittest.mock import MagicMock

from window_switcher.commands import VERBS, CommandExecutor
from window_switcher.exceptions import AppleScriptError, StorageError
from window_switcher.exclusions import ExclusionStore
from window_switcher.models import DisplayItem
from window_switcher.storage import LocalStorage
from window_switcher.utils import AppleScriptExecutor


def _item(**overrides) -> DisplayItem:
    fields = dict(id="com.x-w0", app_name="Notes", bundle_id="com.x", window_index=0, has_windows=True)
    fields.update(overrides)
    return DisplayItem(**fields)


def _commands(storage: LocalStorage):
    executor = MagicMock(spec=AppleScriptExecutor)
    return CommandExecutor(ExclusionStore(storage), executor), executor


def test_every_verb_has_a_command(storage: LocalStorage) -> None:
    commands, _ = _commands(storage)
    for verb in VERBS:
        assert commands.find(verb) is not None


def test_successful_action(storage: LocalStorage) -> None:
    commands, executor = _commands(storage)
    result = commands.execute("minimize", _item())
    assert result.success is True
    assert result.error is None
    executor.execute_or_raise.assert_called_once()


def test_failure_is_reported_once_without_retry(storage: LocalStorage) -> None:
    commands, executor = _commands(storage)
    executor.execute_or_raise.side_effect = AppleScriptError("Not authorized to send Apple events")
    result = commands.execute("close", _item())
    assert result.success is False
    assert result.error == "Not authorized to send Apple events"
    assert executor.execute_or_raise.call_count == 1


def test_window_action_on_windowless_item_fails(storage: LocalStorage) -> None:
    commands, executor = _commands(storage)
    result = commands.execute("close", _item(window_index=-1, has_windows=False))
    assert result.success is False
    executor.execute_or_raise.assert_not_called()


def test_unknown_verb(storage: LocalStorage) -> None:
    commands, _ = _commands(storage)
    result = commands.execute("explode", _item())
    assert result.success is False
    assert "explode" in result.error


def test_only_switching_closes_the_switcher(storage: LocalStorage) -> None:
    commands, _ = _commands(storage)
    assert commands.closes_switcher("switch") is True
    assert commands.closes_switcher("restore") is True
    for verb in ["close", "minimize", "hide", "quit", "exclude", "include", "explode"]:
        assert commands.closes_switcher(verb) is False


def test_exclude_and_include(storage: LocalStorage) -> None:
    commands, executor = _commands(storage)
    assert commands.execute("exclude", _item()).success is True
    assert ExclusionStore(storage).list() == {"com.x"}
    assert commands.execute("include", _item()).success is True
    assert ExclusionStore(storage).list() == set()
    executor.execute_or_raise.assert_not_called()


def test_exclude_needs_a_bundle_id(storage: LocalStorage) -> None:
    commands, _ = _commands(storage)
    assert commands.execute("exclude", _item(bundle_id="")).success is False


def test_exclude_storage_failure_is_reported() -> None:
    exclusions = MagicMock(spec=ExclusionStore)
    exclusions.add.side_effect = StorageError("disk full")
    commands = CommandExecutor(exclusions, MagicMock(spec=AppleScriptExecutor))
    result = commands.execute("exclude", _item())
    assert result.success is False
    assert result.error == "disk full"
