"""Merge minimized-window status into a running apps snapshot."""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from .models import App, Window


def _status_for(window: Window, statuses: Sequence[bool], numbers: Optional[Sequence[Optional[int]]]) -> bool:
    # Prefer the OS window number: positions shift if a window opened or
    # closed between the fast and the slow query, numbers do not.
    if numbers is not None and window.window_number is not None:
        try:
            position = list(numbers).index(window.window_number)
        except ValueError:
            # Not in the slow snapshot, so it opened after that query ran
            return False
        return position < len(statuses) and statuses[position] is True

    if 0 <= window.index < len(statuses):
        return statuses[window.index] is True
    return False


def merge(
    apps: List[App],
    minimized_map: Optional[Dict[str, Sequence[bool]]],
    window_numbers: Optional[Dict[str, Sequence[Optional[int]]]] = None,
) -> List[App]:
    """
    Apply minimized flags from the slow query to the fast query's apps.

    The function is pure: inputs are never mutated and the result depends only
    on the arguments, so it can be re-run whenever either input changes.

    Args:
        apps: Apps from the fast query (or the cache)
        minimized_map: Bundle id -> minimized flags by window index, or None if
            the slow query has not completed yet
        window_numbers: Bundle id -> window numbers aligned with minimized_map,
            when the slow query could read them

    Returns:
        Apps with window.minimized filled in. If minimized_map is None, apps is
        returned unchanged.
    """
    if minimized_map is None:
        return apps

    merged = []
    for app in apps:
        statuses = minimized_map.get(app.bundle_id)
        if statuses is None:
            merged.append(app)
            continue
        numbers = window_numbers.get(app.bundle_id) if window_numbers else None
        windows = [
            replace(window, minimized=_status_for(window, statuses, numbers))
            for window in app.windows
        ]
        merged.append(replace(app, windows=windows))
    return merged


def count_mismatches(apps: List[App], minimized_map: Dict[str, Sequence[bool]]) -> List[str]:
    """
    Find apps whose window count differs between the two queries.

    A mismatch means windows opened or closed between the queries, so a
    positional join for that app may be off by one or more windows.

    Returns:
        Bundle ids with differing window counts
    """
    mismatched = []
    for app in apps:
        statuses = minimized_map.get(app.bundle_id)
        if statuses is not None and len(statuses) != len(app.windows):
            mismatched.append(app.bundle_id)
    return mismatched
