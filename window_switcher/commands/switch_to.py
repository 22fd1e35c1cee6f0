"""Command to switch to (or restore) a window."""

from .base import WindowActionCommand
from ..window_control import switch_to_window


class SwitchToCommand(WindowActionCommand):
    """Command to bring a window to the front, restoring it if minimized."""

    verbs = ("switch", "restore")
    progress = "Switching to"
    done = "Switched to"

    @property
    def action(self):
        return switch_to_window

    def closes_switcher(self) -> bool:
        return True
