"""Concurrent acquisition and reconciliation of running apps and window state."""

import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Tuple

from .arrange import arrange, normalize_order
from .models import ActionResult, App, Partition, WindowStates
from .reconcile import count_mismatches, merge
from .switcher import ItemRef, Switcher


class SwitcherSession:
    """
    Keeps the latest fast snapshot and the latest window states, and merges
    them on demand.

    The fast query and the slow query run side by side and may finish in any
    order. Each refresh gets a generation number; a result is kept only if no
    result from a newer generation has already arrived, so a superseded query
    is simply ignored when it eventually completes. The merged view is
    recomputed from the latest pair on every read, never patched in place.
    """

    def __init__(
        self,
        switcher: Switcher,
        order: str = "most-recent",
        on_update: Optional[Callable[[], None]] = None,
        pool=None
    ):
        """
        Initialize the session.

        Args:
            switcher: Switcher providing queries, cache and actions
            order: "most-recent" or "alphabetical"
            on_update: Called (from a worker thread) after each accepted result
            pool: Executor with a concurrent.futures-style submit (for testing)
        """
        self.switcher = switcher
        self.order = normalize_order(order)
        self.on_update = on_update
        self._owns_pool = pool is None
        self._pool = pool or ThreadPoolExecutor(max_workers=2, thread_name_prefix="window-switcher")

        self._lock = threading.Lock()
        self._generation = 0
        self._apps: Optional[List[App]] = None
        self._apps_generation = -1
        self._states: Optional[WindowStates] = None
        self._states_generation = -1
        self._pending: List[Future] = []

    def start(self) -> None:
        """Paint from the cache, then start both queries."""
        cached = self.switcher.get_cached_running_apps()
        if cached:
            with self._lock:
                if self._apps is None:
                    self._apps = cached
        self.refresh()

    def refresh(self) -> int:
        """
        Start a new fast query and a new slow query.

        Returns:
            Generation number of this refresh
        """
        with self._lock:
            self._generation += 1
            generation = self._generation

        fast = self._pool.submit(self.switcher.fetch_running_apps)
        slow = self._pool.submit(self.switcher.get_window_states)
        with self._lock:
            self._pending = [f for f in self._pending if not f.done()] + [fast, slow]

        fast.add_done_callback(lambda f: self._on_apps(generation, f))
        slow.add_done_callback(lambda f: self._on_states(generation, f))
        return generation

    def _on_apps(self, generation: int, future: Future) -> None:
        try:
            apps = future.result()
        except Exception as e:
            print(f"Warning: Running apps query failed: {e}")
            apps = []

        with self._lock:
            if generation < self._apps_generation:
                return
            if apps:
                self._apps = apps
                self._apps_generation = generation
                # Only an accepted generation reaches the cache
                self.switcher.set_cached_running_apps(apps)
            elif self._apps is None:
                # Empty means "unknown": fall back to whatever the cache holds
                self._apps = self.switcher.cache.get_stale()
            states = self._states

        if apps and states is not None:
            self._warn_mismatches(apps, states)
        self._notify()

    def _on_states(self, generation: int, future: Future) -> None:
        try:
            states = future.result()
        except Exception as e:
            print(f"Warning: Minimized windows query failed: {e}")
            return

        with self._lock:
            if generation < self._states_generation:
                return
            self._states = states
            self._states_generation = generation
            apps = self._apps

        if apps:
            self._warn_mismatches(apps, states)
        self._notify()

    def _warn_mismatches(self, apps: List[App], states: WindowStates) -> None:
        for bundle_id in count_mismatches(apps, states.minimized):
            if bundle_id not in states.window_numbers:
                print(f"Warning: Window list of {bundle_id} changed between queries; minimized state may be off")

    def _notify(self) -> None:
        if self.on_update is None:
            return
        try:
            self.on_update()
        except Exception as e:
            print(f"Warning: Update callback failed: {e}")

    @property
    def is_loading(self) -> bool:
        """True until the first snapshot (cached or live) is available."""
        with self._lock:
            return self._apps is None and any(not f.done() for f in self._pending)

    def enriched_apps(self) -> Optional[List[App]]:
        """
        Latest apps with minimized flags merged in.

        Returns:
            Apps, or None if no snapshot has arrived yet
        """
        with self._lock:
            apps = self._apps
            states = self._states
        if apps is None:
            return None
        if states is None:
            return merge(apps, None)
        return merge(apps, states.minimized, states.window_numbers)

    def view(self, order: Optional[str] = None) -> Partition:
        """
        Current display partition (empty buckets before the first snapshot).

        Args:
            order: Order for this view only; defaults to the session's order
        """
        apps = self.enriched_apps()
        if apps is None:
            return Partition()
        order = self.order if order is None else normalize_order(order)
        return arrange(apps, self.switcher.get_excluded_apps(), order)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for in-flight queries to finish.

        Returns:
            True if everything finished within the timeout
        """
        with self._lock:
            pending = list(self._pending)
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def perform(self, verb: str, item: ItemRef) -> Tuple[ActionResult, bool]:
        """
        Run one action, then close or refresh.

        A successful switch closes the switcher; any other successful action
        refreshes the queries. Failures leave the view as it is.

        Returns:
            Tuple of (result, should_close)
        """
        result = self.switcher.perform(verb, item)
        if not result.success:
            return result, False
        if self.switcher.closes_switcher(verb):
            return result, True
        self.refresh()
        return result, False

    def close(self) -> None:
        """Stop accepting work. Running queries finish in the background."""
        if self._owns_pool:
            self._pool.shutdown(wait=False)
