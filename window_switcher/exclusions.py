"""Durable set of bundle identifiers hidden from the switcher."""

import json
from typing import List, Set

from .storage import LocalStorage

EXCLUDED_APPS_KEY = "excludedApps"


class ExclusionStore:
    """Exclusion list stored as a JSON array, rewritten whole on every change."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def list(self) -> Set[str]:
        """
        Get the excluded bundle identifiers.

        Returns:
            Set of bundle ids (empty if nothing stored or the payload is corrupt)
        """
        return set(self._load())

    def ordered(self) -> List[str]:
        """Excluded bundle identifiers in the order they were added."""
        return self._load()

    def add(self, bundle_id: str) -> None:
        """
        Exclude an app. No-op if it is already excluded.

        Raises:
            StorageError: If the data file cannot be written
        """
        excluded = self._load()
        if bundle_id in excluded:
            return
        excluded.append(bundle_id)
        self.storage.set_item(EXCLUDED_APPS_KEY, json.dumps(excluded))

    def remove(self, bundle_id: str) -> None:
        """
        Stop excluding an app. No-op if it is not excluded.

        Raises:
            StorageError: If the data file cannot be written
        """
        excluded = self._load()
        if bundle_id not in excluded:
            return
        updated = [b for b in excluded if b != bundle_id]
        self.storage.set_item(EXCLUDED_APPS_KEY, json.dumps(updated))

    def _load(self) -> List[str]:
        stored = self.storage.get_item(EXCLUDED_APPS_KEY)
        if not stored:
            return []
        try:
            parsed = json.loads(stored)
        except json.JSONDecodeError:
            return []
        if not isinstance(parsed, list):
            return []

        excluded: List[str] = []
        for bundle_id in parsed:
            if isinstance(bundle_id, str) and bundle_id not in excluded:
                excluded.append(bundle_id)
        return excluded
