"""Shared fixtures: a temp data file and an osascript-free executor."""

import json
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Callable, List, Tuple
from unittest.mock import MagicMock

import pytest

from window_switcher.cache import RunningAppsCache
from window_switcher.exclusions import ExclusionStore
from window_switcher.models import App, Window
from window_switcher.monitoring.app_monitor import FAST_SCRIPT
from window_switcher.monitoring.window_monitor import MINIMIZED_SCRIPT
from window_switcher.storage import LocalStorage
from window_switcher.switcher import Switcher
from window_switcher.utils import AppleScriptExecutor


def make_app(bundle_id: str, name: str = None, frontmost: bool = False, titles: List[str] = (), numbers: List[int] = None) -> App:
    windows = []
    for i, title in enumerate(titles):
        number = numbers[i] if numbers else None
        windows.append(Window(title=title, index=i, window_number=number))
    return App(name=name or bundle_id, bundle_id=bundle_id, frontmost=frontmost, app_path=f"/Applications/{name or bundle_id}.app", windows=windows)


class FakeOS:
    """Answers the two JXA queries with canned JSON."""

    def __init__(self):
        self.apps: List[dict] = []
        self.states: Any = {}
        self.fast_ok = True
        self.slow_ok = True

    def execute_javascript(self, script: str) -> Tuple[bool, Any, Any]:
        if script == FAST_SCRIPT:
            if not self.fast_ok:
                return False, None, "execution error: System Events got an error"
            return True, json.dumps(self.apps), None
        if script == MINIMIZED_SCRIPT:
            if not self.slow_ok:
                return False, None, "execution error"
            return True, json.dumps(self.states), None
        raise AssertionError("unexpected script")


class ManualPool:
    """Executor whose submitted calls run only when the test says so."""

    def __init__(self):
        self.calls: List[Tuple[Callable, Future]] = []

    def submit(self, fn, *args, **kwargs) -> Future:
        future = Future()
        self.calls.append((lambda: fn(*args, **kwargs), future))
        return future

    def run(self, index: int) -> None:
        fn, future = self.calls[index]
        future.set_result(fn())

    def run_all(self) -> None:
        for index, (_, future) in enumerate(self.calls):
            if not future.done():
                self.run(index)


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    return tmp_path / "data.json"


@pytest.fixture
def storage(data_path: Path) -> LocalStorage:
    return LocalStorage(str(data_path))


@pytest.fixture
def fake_os() -> FakeOS:
    return FakeOS()


@pytest.fixture
def executor(fake_os: FakeOS) -> MagicMock:
    mock = MagicMock(spec=AppleScriptExecutor)
    mock.execute_javascript.side_effect = fake_os.execute_javascript
    mock.execute_or_raise.return_value = None
    return mock


@pytest.fixture
def switcher(storage: LocalStorage, executor: MagicMock) -> Switcher:
    return Switcher(
        cache=RunningAppsCache(storage, ttl=20),
        exclusions=ExclusionStore(storage),
        executor=executor,
    )
