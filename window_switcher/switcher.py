"""Public entry points used by the presentation layer."""

from typing import Any, Dict, List, Optional, Set, Union

from .arrange import MOST_RECENT, arrange
from .cache import RunningAppsCache
from .commands import CommandExecutor
from .exclusions import ExclusionStore
from .models import ActionResult, App, DisplayItem, Partition, WindowStates
from .monitoring import query_running_apps, query_window_states
from .reconcile import merge
from .storage import LocalStorage
from .utils import AppleScriptExecutor

ItemRef = Union[DisplayItem, Dict[str, Any]]

# Module-level singleton instance
_instance: Optional['Switcher'] = None


def get_switcher() -> Optional['Switcher']:
    """
    Get the global switcher instance.

    Returns:
        Switcher instance if initialized, None otherwise
    """
    return _instance


def initialize_switcher(
    data_path: Optional[str] = None,
    cache_ttl: Optional[float] = None,
    osascript_timeout: Optional[float] = None
) -> 'Switcher':
    """
    Initialize the global switcher instance.

    Idempotent: if called multiple times, returns the existing instance
    without re-initializing. Missing arguments come from config.

    Returns:
        Switcher instance
    """
    global _instance

    if _instance is not None:
        return _instance

    from .config import CACHE_TTL, DATA_PATH, OSASCRIPT_TIMEOUT

    storage = LocalStorage(data_path or DATA_PATH)
    _instance = Switcher(
        cache=RunningAppsCache(storage, ttl=cache_ttl or CACHE_TTL),
        exclusions=ExclusionStore(storage),
        executor=AppleScriptExecutor(timeout=osascript_timeout or OSASCRIPT_TIMEOUT),
    )
    return _instance


def reset_switcher() -> None:
    """Reset the global switcher instance (for testing)."""
    global _instance
    _instance = None


def _as_item(item: ItemRef) -> DisplayItem:
    if isinstance(item, DisplayItem):
        return item
    return DisplayItem.from_dict(item)


class Switcher:
    """Ties the OS queries, the cache, the exclusion list and the actions together."""

    def __init__(self, cache: RunningAppsCache, exclusions: ExclusionStore, executor: Optional[AppleScriptExecutor] = None):
        """
        Initialize the switcher.

        Args:
            cache: Running apps cache
            exclusions: Exclusion store
            executor: AppleScript executor for queries and actions
        """
        self.cache = cache
        self.exclusions = exclusions
        self.executor = executor or AppleScriptExecutor()
        self.commands = CommandExecutor(exclusions, self.executor)

    # Queries
    def get_running_apps(self) -> List[App]:
        """
        Run the fast query and write a non-empty result through to the cache.

        Returns:
            Apps from the OS, or [] if the query failed
        """
        apps = self.fetch_running_apps()
        if apps:
            self.cache.set(apps)
        return apps

    def fetch_running_apps(self) -> List[App]:
        """Run the fast query without touching the cache."""
        return query_running_apps(self.executor)

    def get_cached_running_apps(self) -> Optional[List[App]]:
        """Cached apps if the snapshot is within its TTL, else None."""
        return self.cache.get()

    def set_cached_running_apps(self, apps: List[App]) -> None:
        self.cache.set(apps)

    def get_window_states(self) -> WindowStates:
        """Run the slow query (minimized flags and window numbers)."""
        return query_window_states(self.executor)

    def get_minimized_status(self) -> Dict[str, List[bool]]:
        """Run the slow query, minimized flags only."""
        return self.get_window_states().minimized

    def arrange(
        self,
        order: str = MOST_RECENT,
        apps: Optional[List[App]] = None,
        states: Optional[WindowStates] = None
    ) -> Partition:
        """
        Partition apps into display buckets with the exclusion list applied.

        The cached snapshot comes from the fast query, which does not read
        minimized state. Without states every window is treated as active.

        Args:
            order: "most-recent" or "alphabetical"
            apps: Apps to arrange (defaults to the cached snapshot)
            states: Result of get_window_states() to merge in first

        Returns:
            Partition, empty if there is nothing to show
        """
        if apps is None:
            apps = self.cache.get() or []
        if states is not None:
            apps = merge(apps, states.minimized, states.window_numbers)
        return arrange(apps, self.get_excluded_apps(), order)

    # Exclusions
    def get_excluded_apps(self) -> Set[str]:
        return self.exclusions.list()

    def add_excluded_app(self, bundle_id: str) -> None:
        self.exclusions.add(bundle_id)

    def remove_excluded_app(self, bundle_id: str) -> None:
        self.exclusions.remove(bundle_id)

    # Actions
    def perform(self, verb: str, item: ItemRef) -> ActionResult:
        """
        Run one action on an item reference.

        Args:
            verb: Action verb ("switch", "close", "minimize", ...)
            item: DisplayItem or its dict shape (appName, bundleId,
                windowIndex, hasWindows, minimized)

        Returns:
            ActionResult
        """
        try:
            display_item = _as_item(item)
        except ValueError as e:
            return ActionResult.failed(str(e))
        return self.commands.execute(verb, display_item)

    def switch_to(self, item: ItemRef) -> ActionResult:
        return self.perform("switch", item)

    def restore(self, item: ItemRef) -> ActionResult:
        return self.perform("restore", item)

    def close(self, item: ItemRef) -> ActionResult:
        return self.perform("close", item)

    def minimize(self, item: ItemRef) -> ActionResult:
        return self.perform("minimize", item)

    def hide(self, item: ItemRef) -> ActionResult:
        return self.perform("hide", item)

    def quit(self, item: ItemRef) -> ActionResult:
        return self.perform("quit", item)

    def closes_switcher(self, verb: str) -> bool:
        return self.commands.closes_switcher(verb)
