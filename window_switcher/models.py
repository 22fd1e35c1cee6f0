"""Data models for running apps, windows and display items."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Window:
    """A window as returned by one fast query. `index` is 0-based and process-local."""
    title: str
    index: int
    minimized: bool = False
    window_number: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "minimized": self.minimized,
            "index": self.index,
        }
        if self.window_number is not None:
            data["windowNumber"] = self.window_number
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], position: int = 0) -> "Window":
        """
        Build a window from its JSON shape.

        Args:
            data: Window dict (camelCase keys)
            position: Index to use when the record carries none

        Returns:
            Window instance
        """
        index = data.get("index")
        number = data.get("windowNumber")
        title = data.get("title")
        return cls(
            title=title if isinstance(title, str) else "",
            index=index if _is_int(index) else position,
            minimized=data.get("minimized") is True,
            window_number=number if _is_int(number) else None,
        )


@dataclass
class App:
    """A running, addressable application. `bundle_id` is its only stable identity."""
    name: str
    bundle_id: str
    frontmost: bool = False
    app_path: str = ""
    windows: List[Window] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "bundleId": self.bundle_id,
            "frontmost": self.frontmost,
            "appPath": self.app_path,
            "windows": [window.to_dict() for window in self.windows],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "App":
        """
        Build an app from its JSON shape.

        Args:
            data: App dict (camelCase keys)

        Returns:
            App instance

        Raises:
            ValueError: If the record has no usable name or bundle identifier
        """
        if not isinstance(data, dict):
            raise ValueError(f"App record must be an object, got {type(data).__name__}")
        name = data.get("name")
        bundle_id = data.get("bundleId")
        if not isinstance(bundle_id, str) or not bundle_id:
            raise ValueError("App record has no bundleId")
        if not isinstance(name, str):
            raise ValueError(f"App record '{bundle_id}' has no name")

        raw_windows = data.get("windows")
        windows = []
        if isinstance(raw_windows, list):
            for position, raw in enumerate(raw_windows):
                if isinstance(raw, dict):
                    windows.append(Window.from_dict(raw, position))

        app_path = data.get("appPath")
        return cls(
            name=name,
            bundle_id=bundle_id,
            frontmost=data.get("frontmost") is True,
            app_path=app_path if isinstance(app_path, str) else "",
            windows=windows,
        )


@dataclass
class DisplayItem:
    """One row of the switcher: an (app, window) pair or a windowless app."""
    id: str
    app_name: str
    bundle_id: str
    app_path: str = ""
    window_title: Optional[str] = None
    window_index: int = -1
    window_number: Optional[int] = None
    minimized: bool = False
    has_windows: bool = False
    frontmost: bool = False

    @property
    def title(self) -> str:
        return self.window_title or self.app_name

    @property
    def subtitle(self) -> Optional[str]:
        return self.app_name if self.window_title else None

    @property
    def keywords(self) -> List[str]:
        return [k for k in (self.app_name, self.window_title, self.bundle_id) if k]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "appName": self.app_name,
            "bundleId": self.bundle_id,
            "appPath": self.app_path,
            "windowIndex": self.window_index,
            "minimized": self.minimized,
            "hasWindows": self.has_windows,
            "frontmost": self.frontmost,
            "title": self.title,
        }
        if self.window_title is not None:
            data["windowTitle"] = self.window_title
        if self.subtitle is not None:
            data["subtitle"] = self.subtitle
        if self.window_number is not None:
            data["windowNumber"] = self.window_number
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DisplayItem":
        """
        Build an item reference from a client payload.

        Only appName is strictly required by the actions; the rest default
        to a windowless reference.

        Raises:
            ValueError: If the payload has no appName
        """
        if not isinstance(data, dict):
            raise ValueError("Item must be an object")
        app_name = data.get("appName")
        if not isinstance(app_name, str) or not app_name:
            raise ValueError("Item has no appName")
        bundle_id = data.get("bundleId") if isinstance(data.get("bundleId"), str) else ""
        window_index = data.get("windowIndex")
        if not _is_int(window_index):
            window_index = -1
        has_windows = data.get("hasWindows")
        if not isinstance(has_windows, bool):
            has_windows = window_index >= 0
        window_title = data.get("windowTitle")
        number = data.get("windowNumber")
        item_id = data.get("id")
        if not isinstance(item_id, str):
            suffix = f"-w{window_index}" if has_windows else "-no-window"
            item_id = f"{bundle_id}{suffix}"
        return cls(
            id=item_id,
            app_name=app_name,
            bundle_id=bundle_id,
            app_path=data.get("appPath") if isinstance(data.get("appPath"), str) else "",
            window_title=window_title if isinstance(window_title, str) else None,
            window_index=window_index,
            window_number=number if _is_int(number) else None,
            minimized=data.get("minimized") is True,
            has_windows=has_windows,
            frontmost=data.get("frontmost") is True,
        )


@dataclass
class Partition:
    """The three display buckets handed to the presentation layer."""
    active: List[DisplayItem] = field(default_factory=list)
    minimized: List[DisplayItem] = field(default_factory=list)
    windowless: List[DisplayItem] = field(default_factory=list)

    def all_items(self) -> List[DisplayItem]:
        return self.active + self.minimized + self.windowless

    def to_dict(self) -> Dict[str, Any]:
        return {
            "active": [item.to_dict() for item in self.active],
            "minimized": [item.to_dict() for item in self.minimized],
            "windowless": [item.to_dict() for item in self.windowless],
        }


@dataclass
class WindowStates:
    """Result of the slow query: minimized flags and window numbers per bundle id."""
    minimized: Dict[str, List[bool]] = field(default_factory=dict)
    window_numbers: Dict[str, List[Optional[int]]] = field(default_factory=dict)


@dataclass
class ActionResult:
    """Outcome of a one-shot window action. Never retried."""
    success: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ActionResult":
        return cls(success=True)

    @classmethod
    def failed(cls, error: str) -> "ActionResult":
        return cls(success=False, error=error)


def apps_from_list(records: Any) -> List[App]:
    """
    Parse a JSON list of app records, dropping malformed entries.

    Args:
        records: Decoded JSON value (expected to be a list)

    Returns:
        List of App instances (empty if records is not a list)
    """
    if not isinstance(records, list):
        return []
    apps = []
    for record in records:
        try:
            apps.append(App.from_dict(record))
        except ValueError:
            continue
    return apps


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
