"""Configuration for the window switcher."""

import os
from dotenv import load_dotenv

from .exceptions import ConfigError

# Load environment variables from .env file
load_dotenv()

APP_ORDERS = ["most-recent", "alphabetical"]


class Config:
    """Configuration class for the window switcher."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        # Local key-value store holding the exclusion list and the running apps cache
        self.data_path = os.path.expanduser(
            os.getenv("WINDOW_SWITCHER_DATA_PATH", "~/.window_switcher_data.json")
        )

        # Running apps snapshot is served for this long before it counts as stale
        self.cache_ttl = self._float("WINDOW_SWITCHER_CACHE_TTL", "20")

        # "most-recent" (frontmost first, then by name) or "alphabetical"
        # Unknown values fall back to "most-recent"
        app_order = os.getenv("WINDOW_SWITCHER_APP_ORDER", "most-recent").strip().lower()
        self.app_order = app_order if app_order in APP_ORDERS else "most-recent"

        # Upper bound for a single osascript call; the minimized query is the slow one
        self.osascript_timeout = self._float("WINDOW_SWITCHER_OSASCRIPT_TIMEOUT", "10")

        # Local API (for external UI clients)
        self.api_enabled = os.getenv("WINDOW_SWITCHER_API_ENABLED", "false").lower() == "true"
        self.api_port = self._int("WINDOW_SWITCHER_API_PORT", "8771")

        # Minimum score for a fuzzy search hit (exact=100, prefix>=80, substring>=50)
        self.search_threshold = self._float("WINDOW_SWITCHER_SEARCH_THRESHOLD", "30")

        # Validate configuration
        self._validate()

    @staticmethod
    def _float(name: str, default: str) -> float:
        raw = os.getenv(name, default)
        try:
            return float(raw)
        except ValueError:
            raise ConfigError(f"{name} must be a number, got '{raw}'")

    @staticmethod
    def _int(name: str, default: str) -> int:
        raw = os.getenv(name, default)
        try:
            return int(raw)
        except ValueError:
            raise ConfigError(f"{name} must be an integer, got '{raw}'")

    def _validate(self):
        """Validate configuration values."""
        if self.cache_ttl <= 0:
            raise ConfigError(f"Cache TTL must be positive, got {self.cache_ttl}")

        if self.osascript_timeout <= 0:
            raise ConfigError(f"osascript timeout must be positive, got {self.osascript_timeout}")

        if not 1 <= self.api_port <= 65535:
            raise ConfigError(f"API port must be between 1 and 65535, got {self.api_port}")

        if not 0 <= self.search_threshold <= 100:
            raise ConfigError(
                f"Search threshold must be between 0 and 100, got {self.search_threshold}"
            )


# Create a global config instance
_config = Config()

# Expose configuration values as module-level variables
DATA_PATH = _config.data_path
CACHE_TTL = _config.cache_ttl
APP_ORDER = _config.app_order
OSASCRIPT_TIMEOUT = _config.osascript_timeout
API_ENABLED = _config.api_enabled
API_PORT = _config.api_port
SEARCH_THRESHOLD = _config.search_threshold

__all__ = [
    "Config",
    "APP_ORDERS",
    "DATA_PATH",
    "CACHE_TTL",
    "APP_ORDER",
    "OSASCRIPT_TIMEOUT",
    "API_ENABLED",
    "API_PORT",
    "SEARCH_THRESHOLD",
]
