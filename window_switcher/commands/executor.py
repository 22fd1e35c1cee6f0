"""Command executor to route action verbs to the appropriate command classes."""

from typing import List, Optional

from .base import Command
from .switch_to import SwitchToCommand
from .close_window import CloseWindowCommand
from .minimize_window import MinimizeWindowCommand
from .hide_app import HideAppCommand
from .quit_app import QuitAppCommand
from .exclude_app import ExcludeAppCommand, IncludeAppCommand
from ..exclusions import ExclusionStore
from ..models import ActionResult, DisplayItem
from ..utils import AppleScriptExecutor

VERBS = ["switch", "restore", "close", "minimize", "hide", "quit", "exclude", "include"]


class CommandExecutor:
    """Executes switcher actions by verb."""

    def __init__(self, exclusions: ExclusionStore, executor: Optional[AppleScriptExecutor] = None):
        """
        Initialize the command executor with available commands.

        Args:
            exclusions: Exclusion store used by exclude/include
            executor: AppleScript executor shared by the window commands
        """
        executor = executor or AppleScriptExecutor()
        self.commands: List[Command] = [
            SwitchToCommand(executor),
            CloseWindowCommand(executor),
            MinimizeWindowCommand(executor),
            HideAppCommand(executor),
            QuitAppCommand(executor),
            ExcludeAppCommand(exclusions),
            IncludeAppCommand(exclusions),
        ]

    def find(self, verb: str) -> Optional[Command]:
        """Find the command that handles a verb."""
        for command in self.commands:
            if command.can_handle(verb):
                return command
        return None

    def execute(self, verb: str, item: DisplayItem) -> ActionResult:
        """
        Execute one action. At most once: failures are returned, not retried.

        Args:
            verb: Action verb (see VERBS)
            item: Display item to act on

        Returns:
            ActionResult for the action
        """
        command = self.find(verb)
        if command is None:
            print(f"Unknown action: {verb}\n")
            return ActionResult.failed(f"Unknown action: {verb}")
        return command.execute(item)

    def closes_switcher(self, verb: str) -> bool:
        """True if a successful run of verb should close the switcher."""
        command = self.find(verb)
        return command is not None and command.closes_switcher()
