"""Command to hide an application."""

from .base import WindowActionCommand
from ..window_control import hide_app


class HideAppCommand(WindowActionCommand):
    """Command to hide every window of an application."""

    verbs = ("hide",)
    progress = "Hiding"
    done = "Hid"

    @property
    def action(self):
        return hide_app
