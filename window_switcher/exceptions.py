"""Custom exception classes for the window switcher."""

from typing import Optional


class WindowSwitcherError(Exception):
    """Base exception for window switcher errors."""
    pass


class ConfigError(WindowSwitcherError, ValueError):
    """Exception raised when a configuration value is invalid."""
    pass


class AppleScriptError(WindowSwitcherError):
    """Exception raised for AppleScript execution errors."""

    def __init__(self, message: str, stderr: Optional[str] = None):
        super().__init__(message)
        self.stderr = stderr


class WindowControlError(WindowSwitcherError):
    """Exception raised for window control errors."""
    pass


class NoWindowError(WindowControlError):
    """Exception raised when a window action targets an app with no window."""
    pass


class StorageError(WindowSwitcherError):
    """Exception raised when the local data file cannot be written."""
    pass
