"""Window and application actions using AppleScript.

Every function here is a one-shot mutation of another process. They raise
AppleScriptError on failure and are never retried: re-sending a close or a
keystroke after the window list shifted could hit the wrong window.
"""

from typing import Optional

from .exceptions import NoWindowError
from .models import DisplayItem
from .utils import AppleScriptExecutor, escape_applescript_string


def _window_number(item: DisplayItem) -> int:
    """1-based AppleScript window index for an item."""
    if not item.has_windows or item.window_index < 0:
        raise NoWindowError(f"'{item.app_name}' has no window to act on")
    return item.window_index + 1


def switch_to_window(item: DisplayItem, executor: Optional[AppleScriptExecutor] = None) -> None:
    """
    Bring an item's window (or its app) to the front.

    Minimized windows are restored first. A windowless app is reopened and,
    if it still has no window, asked for a new one with Cmd-N.

    Args:
        item: Display item to switch to
        executor: AppleScript executor to use

    Raises:
        AppleScriptError: If osascript fails
    """
    executor = executor or AppleScriptExecutor()
    name = escape_applescript_string(item.app_name)

    if item.has_windows and item.window_index >= 0:
        win_idx = _window_number(item)
        script = f'''
        tell application "System Events"
            tell process "{name}"
                set frontmost to true
                try
                    set value of attribute "AXMinimized" of window {win_idx} to false
                end try
                try
                    perform action "AXRaise" of window {win_idx}
                end try
            end tell
        end tell
        tell application "{name}" to activate
        '''
    else:
        script = f'''
        tell application "{name}"
            activate
            reopen
        end tell
        delay 0.1
        tell application "System Events"
            tell process "{name}"
                if (count of windows) is 0 then
                    keystroke "n" using command down
                end if
            end tell
        end tell
        '''
    executor.execute_or_raise(script)


def close_window(item: DisplayItem, executor: Optional[AppleScriptExecutor] = None) -> None:
    """
    Close an item's window via its close button, falling back to Cmd-W.

    Raises:
        NoWindowError: If the item has no window
        AppleScriptError: If osascript fails
    """
    executor = executor or AppleScriptExecutor()
    win_idx = _window_number(item)
    name = escape_applescript_string(item.app_name)
    script = f'''
    tell application "System Events"
        tell process "{name}"
            try
                perform action "AXPress" of button 1 of window {win_idx}
            on error
                set frontmost to true
                perform action "AXRaise" of window {win_idx}
                delay 0.1
                keystroke "w" using command down
            end try
        end tell
    end tell
    '''
    executor.execute_or_raise(script)


def minimize_window(item: DisplayItem, executor: Optional[AppleScriptExecutor] = None) -> None:
    """
    Minimize an item's window.

    Raises:
        NoWindowError: If the item has no window
        AppleScriptError: If osascript fails
    """
    executor = executor or AppleScriptExecutor()
    win_idx = _window_number(item)
    name = escape_applescript_string(item.app_name)
    script = f'''
    tell application "System Events"
        tell process "{name}"
            set value of attribute "AXMinimized" of window {win_idx} to true
        end tell
    end tell
    '''
    executor.execute_or_raise(script)


def hide_app(item: DisplayItem, executor: Optional[AppleScriptExecutor] = None) -> None:
    """Hide an item's application."""
    executor = executor or AppleScriptExecutor()
    name = escape_applescript_string(item.app_name)
    script = f'''
    tell application "System Events"
        set visible of process "{name}" to false
    end tell
    '''
    executor.execute_or_raise(script)


def quit_app(item: DisplayItem, executor: Optional[AppleScriptExecutor] = None) -> None:
    """Quit an item's application."""
    executor = executor or AppleScriptExecutor()
    name = escape_applescript_string(item.app_name)
    executor.execute_or_raise(f'tell application "{name}" to quit')
