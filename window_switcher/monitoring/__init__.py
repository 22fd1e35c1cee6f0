"""OS queries for running apps and window state."""

from .app_monitor import query_running_apps
from .window_monitor import parse_window_states, query_minimized_status, query_window_states

__all__ = [
    'query_running_apps',
    'query_minimized_status',
    'query_window_states',
    'parse_window_states',
]
