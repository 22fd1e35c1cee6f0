"""Base command class for switcher actions."""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..exceptions import WindowSwitcherError
from ..models import ActionResult, DisplayItem
from ..utils import AppleScriptExecutor


class Command(ABC):
    """Abstract base class for switcher actions."""

    @abstractmethod
    def execute(self, item: DisplayItem) -> ActionResult:
        """
        Execute the action on a display item.

        Args:
            item: Display item the user picked

        Returns:
            ActionResult with the error text on failure
        """
        pass

    @abstractmethod
    def can_handle(self, verb: str) -> bool:
        """
        Check if this command can handle the given action verb.

        Args:
            verb: The action verb string

        Returns:
            True if this command can handle the verb
        """
        pass

    def closes_switcher(self) -> bool:
        """
        Return True if a successful run should close the switcher.

        Switching puts another window in front, so there is nothing left to
        show. Every other action keeps the switcher open and refreshes it.

        Returns:
            True if the switcher should close, False otherwise
        """
        return False  # Default: stay open and refresh


class WindowActionCommand(Command):
    """Runs one window_control function and reports the outcome."""

    verbs: tuple = ()
    progress = "Working on"
    done = "Done with"

    def __init__(self, executor: Optional[AppleScriptExecutor] = None):
        self.executor = executor or AppleScriptExecutor()

    @property
    @abstractmethod
    def action(self) -> Callable[[DisplayItem, AppleScriptExecutor], None]:
        pass

    def can_handle(self, verb: str) -> bool:
        """Check if this command can handle the verb."""
        return verb in self.verbs

    def execute(self, item: DisplayItem) -> ActionResult:
        """Run the action once. Failures are reported, never retried."""
        print(f"{self.progress} '{item.title}'...")
        try:
            self.action(item, self.executor)
        except WindowSwitcherError as e:
            print(f"✗ Failed: {e}\n")
            return ActionResult.failed(str(e))
        print(f"✓ {self.done} '{item.title}'\n")
        return ActionResult.ok()
