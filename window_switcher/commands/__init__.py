"""Command execution layer for switcher actions."""

from .base import Command, WindowActionCommand
from .executor import VERBS, CommandExecutor
from .switch_to import SwitchToCommand
from .close_window import CloseWindowCommand
from .minimize_window import MinimizeWindowCommand
from .hide_app import HideAppCommand
from .quit_app import QuitAppCommand
from .exclude_app import ExcludeAppCommand, IncludeAppCommand

__all__ = [
    "Command",
    "WindowActionCommand",
    "CommandExecutor",
    "VERBS",
    "SwitchToCommand",
    "CloseWindowCommand",
    "MinimizeWindowCommand",
    "HideAppCommand",
    "QuitAppCommand",
    "ExcludeAppCommand",
    "IncludeAppCommand",
]
