"""Utility modules for the window switcher."""

from .applescript import AppleScriptExecutor, escape_applescript_string

__all__ = ["AppleScriptExecutor", "escape_applescript_string"]
