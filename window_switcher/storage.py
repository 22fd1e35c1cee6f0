"""Local key-value store backed by a single JSON file."""

import json
import os
import tempfile
import threading
from typing import Any, Dict, Optional

from .exceptions import StorageError


class LocalStorage:
    """
    Persists string values under process-wide keys.

    The whole file is re-read on every access so that several switcher
    processes (terminal loop, local API) see each other's writes. Writes go
    through a temporary file and os.replace, so a reader sees either the old
    file or the new one.
    """

    def __init__(self, path: str):
        """
        Initialize the store.

        Args:
            path: Path to the JSON data file (created on first write)
        """
        self.path = path
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        """
        Get the value stored under a key.

        Args:
            key: Storage key

        Returns:
            Stored string, or None if missing or unreadable
        """
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        """
        Store a string value under a key.

        Raises:
            StorageError: If the data file cannot be written
        """
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)

    def remove_item(self, key: str) -> None:
        """Remove a key. No-op if it is not present."""
        with self._lock:
            data = self._load()
            if key not in data:
                return
            del data[key]
            self._save(data)

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, IOError) as e:
            print(f"Warning: Failed to load data from {self.path}: {e}")
            return {}

        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, Any]) -> None:
        data_dir = os.path.dirname(self.path) or "."
        try:
            os.makedirs(data_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=data_dir, prefix=".window_switcher_", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Failed to save data to {self.path}: {e}")
