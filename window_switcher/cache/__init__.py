"""Cache package for the running apps snapshot."""

from .cache import RUNNING_APPS_CACHE_KEY, RunningAppsCache

__all__ = [
    'RUNNING_APPS_CACHE_KEY',
    'RunningAppsCache',
]
