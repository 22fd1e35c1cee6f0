"""Command to close a window."""

from .base import WindowActionCommand
from ..window_control import close_window


class CloseWindowCommand(WindowActionCommand):
    """Command to close a single window."""

    verbs = ("close",)
    progress = "Closing"
    done = "Closed"

    @property
    def action(self):
        return close_window
