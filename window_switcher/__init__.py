"""Window switcher for macOS: running apps, their windows, and actions on them."""

from .arrange import arrange, normalize_order
from .models import ActionResult, App, DisplayItem, Partition, Window, WindowStates
from .reconcile import merge
from .session import SwitcherSession
from .switcher import Switcher, get_switcher, initialize_switcher, reset_switcher

__all__ = [
    "ActionResult",
    "App",
    "DisplayItem",
    "Partition",
    "Switcher",
    "SwitcherSession",
    "Window",
    "WindowStates",
    "arrange",
    "get_switcher",
    "initialize_switcher",
    "merge",
    "normalize_order",
    "reset_switcher",
]
