"""Short-TTL cache for the last running apps snapshot."""

import json
import time
import threading
from typing import Callable, List, Optional, Tuple

from ..exceptions import StorageError
from ..models import App, apps_from_list
from ..storage import LocalStorage

RUNNING_APPS_CACHE_KEY = "runningAppsCache"

# (timestamp in epoch millis or None for legacy payloads, apps)
_Entry = Tuple[Optional[int], List[App]]


def _now_millis() -> int:
    return int(time.time() * 1000)


class RunningAppsCache:
    """
    Caches the last successful fast query.

    The durable copy lives in LocalStorage as {"timestamp": <epoch ms>, "apps": [...]};
    an in-memory copy shadows it for the lifetime of the instance. Both the
    timestamp and the apps are swapped as one tuple, so a reader never pairs a
    new timestamp with an old app list.
    """

    def __init__(self, storage: LocalStorage, ttl: float = 20.0, clock: Optional[Callable[[], int]] = None):
        """
        Initialize the cache.

        Args:
            storage: Key-value store holding the durable copy
            ttl: Time to live in seconds
            clock: Returns the current time in epoch milliseconds (for testing)
        """
        self.storage = storage
        self.ttl = ttl
        self._clock = clock or _now_millis
        self._entry: Optional[_Entry] = None
        self._lock = threading.Lock()

    def get(self) -> Optional[List[App]]:
        """
        Get the cached snapshot if it is younger than the TTL.

        Returns:
            List of apps, or None if absent, expired or unreadable
        """
        entry = self._read()
        if entry is None:
            return None

        timestamp, apps = entry
        # Legacy payloads carry no timestamp, so their age is unknown
        if timestamp is None:
            return None
        if (self._clock() - timestamp) > self.ttl * 1000:
            return None
        return list(apps)

    def get_stale(self) -> Optional[List[App]]:
        """
        Get the cached snapshot regardless of its age.

        Used to paint an immediate view while a fresh query is in flight.

        Returns:
            List of apps, or None if nothing usable is stored
        """
        entry = self._read()
        if entry is None:
            return None
        return list(entry[1])

    def set(self, apps: List[App]) -> None:
        """
        Replace the cached snapshot and its timestamp.

        Args:
            apps: Apps from a successful fast query
        """
        snapshot = list(apps)
        apps_payload = [app.to_dict() for app in snapshot]
        # Memory and disk are replaced under one lock
        with self._lock:
            timestamp = self._clock()
            payload = json.dumps({"timestamp": timestamp, "apps": apps_payload})
            self._entry = (timestamp, snapshot)
            try:
                self.storage.set_item(RUNNING_APPS_CACHE_KEY, payload)
            except StorageError as e:
                print(f"Warning: Failed to persist running apps cache: {e}")

    def invalidate(self) -> None:
        """Drop both the in-memory and the durable copy."""
        with self._lock:
            self._entry = None
            try:
                self.storage.remove_item(RUNNING_APPS_CACHE_KEY)
            except StorageError as e:
                print(f"Warning: Failed to clear running apps cache: {e}")

    def _read(self) -> Optional[_Entry]:
        with self._lock:
            if self._entry is not None:
                return self._entry

        entry = self._load()
        if entry is not None:
            with self._lock:
                if self._entry is None:
                    self._entry = entry
                return self._entry
        return None

    def _load(self) -> Optional[_Entry]:
        stored = self.storage.get_item(RUNNING_APPS_CACHE_KEY)
        if not stored:
            return None

        try:
            parsed = json.loads(stored)
        except json.JSONDecodeError:
            return None

        # Older format stored the bare app list without a timestamp
        if isinstance(parsed, list):
            return None, apps_from_list(parsed)

        if isinstance(parsed, dict):
            timestamp = parsed.get("timestamp")
            apps = parsed.get("apps")
            if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool) and isinstance(apps, list):
                return int(timestamp), apps_from_list(apps)

        return None
