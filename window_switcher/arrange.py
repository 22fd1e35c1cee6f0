"""Ranking and partitioning of running apps into display buckets."""

from typing import Iterable, List, Tuple

from .models import App, DisplayItem, Partition

MOST_RECENT = "most-recent"
ALPHABETICAL = "alphabetical"


def normalize_order(value) -> str:
    """Map a user preference to a known order. Anything unknown is "most-recent"."""
    if isinstance(value, str) and value.strip().lower() == ALPHABETICAL:
        return ALPHABETICAL
    return MOST_RECENT


def name_key(app: App) -> Tuple[str, str, str]:
    """Case-insensitive name first, exact name and bundle id break ties."""
    return app.name.casefold(), app.name, app.bundle_id


def sort_apps(apps: Iterable[App], order: str = MOST_RECENT) -> List[App]:
    """
    Sort apps for display.

    Args:
        apps: Apps to sort
        order: "alphabetical" or "most-recent" (frontmost app first)

    Returns:
        New sorted list
    """
    if normalize_order(order) == ALPHABETICAL:
        return sorted(apps, key=name_key)
    return sorted(apps, key=lambda app: (not app.frontmost,) + name_key(app))


def _windowless_item(app: App) -> DisplayItem:
    return DisplayItem(
        id=f"{app.bundle_id}-no-window",
        app_name=app.name,
        bundle_id=app.bundle_id,
        app_path=app.app_path,
        window_index=-1,
        minimized=False,
        has_windows=False,
        frontmost=app.frontmost,
    )


def arrange(apps: Iterable[App], exclusion_set: Iterable[str], order: str = MOST_RECENT) -> Partition:
    """
    Turn enriched apps into the active / minimized / windowless buckets.

    Excluded apps are dropped, the rest sorted by order. Each window becomes
    one item; multi-window apps label each item with its window title (or the
    app name when the title is empty), single-window apps carry no window
    title. Windowless apps get one item in their own bucket.

    Args:
        apps: Apps with minimized flags already merged
        exclusion_set: Bundle ids to hide
        order: "most-recent" (default) or "alphabetical"

    Returns:
        Partition with items ordered by app, then window index
    """
    excluded = set(exclusion_set)
    visible = [app for app in apps if app.bundle_id not in excluded]

    partition = Partition()
    for app in sort_apps(visible, order):
        if not app.windows:
            partition.windowless.append(_windowless_item(app))
            continue

        multi_window = len(app.windows) > 1
        for window in sorted(app.windows, key=lambda w: w.index):
            item = DisplayItem(
                id=f"{app.bundle_id}-w{window.index}",
                app_name=app.name,
                bundle_id=app.bundle_id,
                app_path=app.app_path,
                window_title=(window.title or app.name) if multi_window else None,
                window_index=window.index,
                window_number=window.window_number,
                minimized=window.minimized,
                has_windows=True,
                frontmost=app.frontmost and not window.minimized,
            )
            if window.minimized:
                partition.minimized.append(item)
            else:
                partition.active.append(item)

    return partition
