"""Command to quit an application."""

from .base import WindowActionCommand
from ..window_control import quit_app


class QuitAppCommand(WindowActionCommand):
    """Command to quit an application completely."""

    verbs = ("quit",)
    progress = "Quitting"
    done = "Quit"

    @property
    def action(self):
        return quit_app
