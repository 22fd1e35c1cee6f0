"""Command to minimize a window."""

from .base import WindowActionCommand
from ..window_control import minimize_window


class MinimizeWindowCommand(WindowActionCommand):
    """Command to minimize a single window."""

    verbs = ("minimize",)
    progress = "Minimizing"
    done = "Minimized"

    @property
    def action(self):
        return minimize_window
