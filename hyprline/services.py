"""Abstract interfaces that the bar's widgets talk to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime

from hyprline.models import (
    BatteryInfo,
    DateTimeConfig,
    KeyboardLayout,
    MenuItem,
    Monitor,
    Notification,
    SystemResources,
    TrayItem,
    VolumeInfo,
    Workspace,
)


class BatteryService(ABC):
    """Source of battery state."""

    @abstractmethod
    def get_battery_info(self) -> BatteryInfo | None:
        """Return the current battery state, or None when unknown."""


class BrightnessService(ABC):
    """Screen brightness control. Values are percentages, 0-100.

    Implementations raise an exception when the backend cannot be reached.
    """

    @abstractmethod
    def get_brightness(self) -> int:
        """Return the current brightness."""

    @abstractmethod
    def set_brightness(self, value: int) -> None:
        """Set the brightness."""

    @abstractmethod
    def increase_brightness(self, percent: int) -> None:
        """Raise the brightness by ``percent``."""

    @abstractmethod
    def decrease_brightness(self, percent: int) -> None:
        """Lower the brightness by ``percent``."""

    @abstractmethod
    def enable_auto_adjustment(self) -> None:
        """Turn automatic adjustment on."""

    @abstractmethod
    def disable_auto_adjustment(self) -> None:
        """Turn automatic adjustment off."""

    @abstractmethod
    def is_auto_adjustment_enabled(self) -> bool:
        """Report whether automatic adjustment is on."""

    @abstractmethod
    def subscribe_brightness_changed(self, callback: Callable[[int], None]) -> None:
        """Call ``callback`` with the new brightness whenever it changes."""


class DateTimeService(ABC):
    """Formatting of the clock text."""

    @abstractmethod
    def format_current(self, config: DateTimeConfig) -> str:
        """Format the current local time."""

    @abstractmethod
    def format_datetime(self, dt: datetime, config: DateTimeConfig) -> str:
        """Format ``dt``."""

    @abstractmethod
    def estimated_width(self, config: DateTimeConfig) -> str:
        """Return a sample string as wide as the widest formatted value."""


class KeyboardLayoutService(ABC):
    """Source of the active keyboard layout."""

    @abstractmethod
    def get_current_layout(self) -> KeyboardLayout | None:
        """Return the active layout, or None when unknown."""


class NotificationService(ABC):
    """Access to the notification history."""

    @abstractmethod
    def get_history(self) -> list[Notification]:
        """Return stored notifications, newest first."""

    @abstractmethod
    def clear_history(self) -> None:
        """Remove every stored notification."""

    @abstractmethod
    def remove_notification(self, id: int) -> None:
        """Remove one stored notification."""


class StatusNotifierWatcherService(ABC):
    """Registry that tray items announce themselves to."""

    @abstractmethod
    def start(self) -> None:
        """Start serving; raises when that fails."""

    @abstractmethod
    def stop(self) -> None:
        """Stop serving; raises when that fails."""

    @abstractmethod
    def get_registered_items(self) -> list[str]:
        """Return the registered item services in registration order."""


class SystemResourcesService(ABC):
    """Source of CPU and memory use."""

    @abstractmethod
    def get_resources(self) -> SystemResources | None:
        """Return current usage, or None when it cannot be read."""


class SystemTrayService(ABC):
    """Access to the tray items and their menus."""

    @abstractmethod
    def get_items(self) -> list[TrayItem]:
        """Return the known tray items."""

    @abstractmethod
    def activate_item(self, service: str) -> None:
        """Activate an item (usually a left click)."""

    @abstractmethod
    def secondary_activate_item(self, service: str) -> None:
        """Secondary activation (usually a middle or right click)."""

    @abstractmethod
    def get_menu(
        self, service: str, menu_path: str, callback: Callable[[list[MenuItem]], None]
    ) -> None:
        """Fetch an item's menu and pass its entries to ``callback``."""

    @abstractmethod
    def activate_menu_item(self, service: str, menu_path: str, item_id: int) -> None:
        """Click a menu entry."""

    @abstractmethod
    def start_monitoring(self, sink: Callable[[list[TrayItem]], None]) -> None:
        """Start watching; ``sink`` receives the full item list on every change."""

    @abstractmethod
    def stop(self) -> None:
        """Stop watching and forget the items."""


class VolumeService(ABC):
    """Output volume control; raises when a change cannot be applied."""

    @abstractmethod
    def get_volume_info(self) -> VolumeInfo | None:
        """Return the current volume, or None when unknown."""

    @abstractmethod
    def set_volume(self, volume: int) -> None:
        """Set the volume, 0-100."""

    @abstractmethod
    def toggle_mute(self) -> None:
        """Flip the mute state."""

    @abstractmethod
    def set_mute(self, muted: bool) -> None:
        """Set the mute state."""


class WorkspaceService(ABC):
    """Queries and commands for the compositor's workspaces."""

    @abstractmethod
    def get_monitors(self) -> list[Monitor]:
        """Return the connected monitors."""

    @abstractmethod
    def get_workspaces(self) -> list[Workspace]:
        """Return all workspaces."""

    @abstractmethod
    def get_active_workspace(self) -> int:
        """Return the id of the focused workspace."""

    @abstractmethod
    def get_active_monitor(self) -> str:
        """Return the name of the focused monitor."""

    @abstractmethod
    def get_active_workspace_for_monitor(self, monitor_name: str) -> int | None:
        """Return the workspace shown on ``monitor_name``."""

    @abstractmethod
    def get_active_window_title(self) -> str:
        """Return the title of the focused window."""

    @abstractmethod
    def switch_workspace(self, id: int) -> None:
        """Focus workspace ``id``."""