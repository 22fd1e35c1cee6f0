"""Commands to exclude an application from the switcher and bring it back."""

from .base import Command
from ..exceptions import StorageError
from ..exclusions import ExclusionStore
from ..models import ActionResult, DisplayItem


class ExcludeAppCommand(Command):
    """Command to hide an application from the switcher."""

    def __init__(self, exclusions: ExclusionStore):
        self.exclusions = exclusions

    def can_handle(self, verb: str) -> bool:
        """Check if this command can handle the verb."""
        return verb == "exclude"

    def execute(self, item: DisplayItem) -> ActionResult:
        """Add the item's bundle id to the exclusion list."""
        if not item.bundle_id:
            return ActionResult.failed(f"'{item.app_name}' has no bundle identifier")
        try:
            self.exclusions.add(item.bundle_id)
        except StorageError as e:
            print(f"✗ Failed to exclude '{item.app_name}': {e}\n")
            return ActionResult.failed(str(e))
        print(f"✓ {item.app_name} excluded\n")
        return ActionResult.ok()


class IncludeAppCommand(Command):
    """Command to show a previously excluded application again."""

    def __init__(self, exclusions: ExclusionStore):
        self.exclusions = exclusions

    def can_handle(self, verb: str) -> bool:
        """Check if this command can handle the verb."""
        return verb == "include"

    def execute(self, item: DisplayItem) -> ActionResult:
        """Remove the item's bundle id from the exclusion list."""
        try:
            self.exclusions.remove(item.bundle_id)
        except StorageError as e:
            print(f"✗ Failed to restore '{item.bundle_id}': {e}\n")
            return ActionResult.failed(str(e))
        print(f"✓ {item.bundle_id} restored\n")
        return ActionResult.ok()
