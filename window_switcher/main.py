"""Main entry point for the terminal window switcher."""

import time
from typing import List, Optional, Tuple

from .api_server import start_api_server
from .arrange import ALPHABETICAL, MOST_RECENT
from .config import API_ENABLED, API_PORT, APP_ORDER, SEARCH_THRESHOLD
from .models import DisplayItem, Partition
from .search import search
from .session import SwitcherSession
from .switcher import initialize_switcher

ACTION_KEYS = {
    "c": "close",
    "m": "minimize",
    "h": "hide",
    "q": "quit",
    "x": "exclude",
}


def print_help():
    """Print help text."""
    print("=" * 60)
    print("Window Switcher")
    print("=" * 60)
    print("  <n>            Switch to item n (restores minimized windows)")
    print("  c <n>          Close window n")
    print("  m <n>          Minimize window n (restore if already minimized)")
    print("  h <n>          Hide the app of item n")
    print("  q <n>          Quit the app of item n")
    print("  x <n>          Exclude the app of item n from the switcher")
    print("  /<text>        Search by app name, window title or bundle id")
    print("  excluded       List excluded apps")
    print("  include <id>   Show an excluded bundle id again")
    print("  o              Toggle order (most-recent / alphabetical)")
    print("  r              Refresh")
    print("  help           Show this help")
    print("  exit           Quit the switcher")
    if API_ENABLED:
        print(f"\nLocal API: http://127.0.0.1:{API_PORT}")
    print("=" * 60)


def time_operation(operation_name: str, func, *args, **kwargs):
    """
    Time an operation and print the duration.

    Args:
        operation_name: Name of the operation for display
        func: Function to call
        *args, **kwargs: Arguments to pass to the function

    Returns:
        Result of the function call
    """
    start_time = time.time()
    result = func(*args, **kwargs)
    elapsed = time.time() - start_time
    print(f"⏱️  {operation_name} took: {elapsed:.2f}s")
    return result


def render(partition: Partition, loading: bool = False) -> List[DisplayItem]:
    """
    Print the partition as numbered sections.

    Returns:
        Items in the order they were numbered
    """
    numbered: List[DisplayItem] = []
    sections = [
        ("Active", partition.active),
        ("Minimized", partition.minimized),
        ("No Windows", partition.windowless),
    ]
    for title, items in sections:
        if not items:
            continue
        print(f"\n{title}:")
        for item in items:
            numbered.append(item)
            marker = "*" if item.frontmost else " "
            subtitle = f"  ({item.subtitle})" if item.subtitle else ""
            print(f" {marker}{len(numbered):3d}. {item.title}{subtitle}")

    if not numbered:
        print("\nLoading..." if loading else "\nNo applications to show.")
    print()
    return numbered


def render_results(items: List[DisplayItem]) -> List[DisplayItem]:
    """Print search results as one numbered list."""
    if not items:
        print("\nNo matches.\n")
        return []
    print("\nResults:")
    for i, item in enumerate(items, 1):
        subtitle = f"  ({item.subtitle})" if item.subtitle else ""
        print(f"  {i:3d}. {item.title}{subtitle}")
    print()
    return items


def parse_selection(text: str, items: List[DisplayItem]) -> Tuple[Optional[str], Optional[DisplayItem]]:
    """
    Parse "<n>" or "<key> <n>" into an action verb and an item.

    Returns:
        Tuple of (verb, item), or (None, None) if the input does not select an item
    """
    parts = text.split()
    if len(parts) == 1 and parts[0].isdigit():
        key, number = None, parts[0]
    elif len(parts) == 2 and parts[0] in ACTION_KEYS and parts[1].isdigit():
        key, number = parts[0], parts[1]
    else:
        return None, None

    position = int(number) - 1
    if not 0 <= position < len(items):
        return None, None
    item = items[position]

    if key is None:
        return ("restore" if item.minimized else "switch"), item
    verb = ACTION_KEYS[key]
    if verb == "minimize" and item.minimized:
        verb = "restore"
    return verb, item


def main():
    """Run the interactive switcher loop."""
    switcher = initialize_switcher()
    session = SwitcherSession(switcher, order=APP_ORDER)

    if API_ENABLED:
        try:
            start_api_server(switcher, session, port=API_PORT, search_threshold=SEARCH_THRESHOLD)
        except Exception as e:
            print(f"Warning: Failed to start local API: {e}")

    print_help()
    session.start()
    time_operation("Window query", session.wait, 5.0)
    items = render(session.view(), loading=session.is_loading)

    while True:
        try:
            text = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye!")
            break

        if not text:
            items = render(session.view(), loading=session.is_loading)
            continue

        if text.lower() in ["exit", "quit"]:
            print("Goodbye!")
            break

        if text.lower() == "help":
            print_help()
            continue

        if text.lower() == "r":
            session.refresh()
            time_operation("Window query", session.wait, 5.0)
            items = render(session.view(), loading=session.is_loading)
            continue

        if text.lower() == "o":
            session.order = ALPHABETICAL if session.order == MOST_RECENT else MOST_RECENT
            print(f"Order: {session.order}")
            items = render(session.view(), loading=session.is_loading)
            continue

        if text.startswith("/"):
            items = render_results(search(session.view().all_items(), text[1:], threshold=SEARCH_THRESHOLD))
            continue

        if text.lower() == "excluded":
            excluded = switcher.exclusions.ordered()
            if excluded:
                print("\nExcluded apps:")
                for bundle_id in excluded:
                    print(f"  - {bundle_id}")
            else:
                print("\nNo excluded apps.")
            print()
            continue

        if text.lower().startswith("include "):
            bundle_id = text[len("include "):].strip()
            result, _ = session.perform("include", {"appName": bundle_id, "bundleId": bundle_id})
            if result.success:
                session.wait(5.0)
                items = render(session.view(), loading=session.is_loading)
            continue

        verb, item = parse_selection(text, items)
        if verb is None:
            print("Unknown input. Type 'help' for commands.\n")
            continue

        result, should_close = session.perform(verb, item)
        if not result.success:
            print(f"Error: Action failed: {result.error}\n")
            continue
        if should_close:
            break
        session.wait(5.0)
        items = render(session.view(), loading=session.is_loading)

    session.close()


if __name__ == "__main__":
    main()
