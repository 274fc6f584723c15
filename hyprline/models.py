"""Plain data types shared by the bar's services and widgets."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


def _field(data: Any, key: str, kind: type, kind_name: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object holding {key!r}, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    value = data[key]
    if kind is not bool and isinstance(value, bool):
        raise ValueError(f"field {key!r} must be {kind_name}, got a boolean")
    if not isinstance(value, kind):
        raise ValueError(f"field {key!r} must be {kind_name}, got {type(value).__name__}")
    return value


def _int(data: Any, key: str) -> int:
    return _field(data, key, int, "an integer")


def _str(data: Any, key: str) -> str:
    return _field(data, key, str, "a string")


def _bool(data: Any, key: str) -> bool:
    return _field(data, key, bool, "a boolean")


@dataclass(frozen=True)
class Workspace:
    """A workspace as reported by the compositor."""

    id: int
    name: str
    windows: int
    monitor: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Workspace:
        """Build from one entry of the compositor's workspace list."""
        return cls(
            id=_int(data, "id"),
            name=_str(data, "name"),
            windows=_int(data, "windows"),
            monitor=_str(data, "monitor"),
        )


@dataclass(frozen=True)
class Monitor:
    """A connected output."""

    name: str
    id: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Monitor:
        """Build from one entry of the compositor's monitor list."""
        return cls(name=_str(data, "name"), id=_int(data, "id"))


@dataclass(frozen=True)
class ActiveWorkspace:
    """The workspace that currently has focus."""

    id: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ActiveWorkspace:
        """Build from the compositor's active-workspace reply."""
        return cls(id=_int(data, "id"))


@dataclass(frozen=True)
class MonitorInfo:
    """A monitor's name and whether it has focus."""

    name: str
    focused: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MonitorInfo:
        """Build from one entry of the compositor's monitor list."""
        return cls(name=_str(data, "name"), focused=_bool(data, "focused"))


@dataclass(frozen=True)
class MonitorWithWorkspace:
    """A monitor together with the id of the workspace shown on it."""

    name: str
    id: int
    active_workspace_id: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MonitorWithWorkspace:
        """Build from a monitor entry carrying an ``activeWorkspace`` object."""
        return cls(
            name=_str(data, "name"),
            id=_int(data, "id"),
            active_workspace_id=_int(_field(data, "activeWorkspace", Mapping, "an object"), "id"),
        )


class TrayStatus(Enum):
    ACTIVE = "Active"
    PASSIVE = "Passive"
    NEEDS_ATTENTION = "NeedsAttention"


@dataclass
class TrayItem:
    """A status-notifier item shown in the system tray."""

    service: str
    icon_name: str
    title: str
    status: TrayStatus = TrayStatus.ACTIVE
    icon_pixmap: list[tuple[int, int, bytes]] | None = None
    icon_theme_path: str | None = None
    menu_path: str | None = None


@dataclass(frozen=True)
class MenuItem:
    """One entry of a tray item's menu."""

    id: int
    label: str
    enabled: bool = True
    visible: bool = True
    is_separator: bool = False


class DateTimeFormat(Enum):
    """How the clock is rendered."""

    SYSTEM_LOCALE = "system_locale"
    CUSTOM = "custom"
    TIME_ONLY = "time_only"
    DATE_ONLY = "date_only"


@dataclass(frozen=True)
class DateTimeConfig:
    """Clock settings; ``pattern`` is the strftime pattern used by CUSTOM."""

    format: DateTimeFormat = DateTimeFormat.SYSTEM_LOCALE
    show_seconds: bool = True
    show_date: bool = True
    pattern: str | None = None

    def __post_init__(self) -> None:
        if self.format is DateTimeFormat.CUSTOM and self.pattern is None:
            raise ValueError("a custom date/time format needs a pattern")


class BatteryStatus(Enum):
    CHARGING = "charging"
    DISCHARGING = "discharging"
    FULL = "full"
    NOT_CHARGING = "not_charging"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class BatteryInfo:
    """Battery charge; the times are in minutes."""

    percentage: int
    status: BatteryStatus
    time_to_empty: int | None = None
    time_to_full: int | None = None


@dataclass(frozen=True)
class VolumeInfo:
    """Output volume, 0-100, and the mute state."""

    volume: int
    muted: bool


class NotificationUrgency(Enum):
    LOW = 0
    NORMAL = 1
    CRITICAL = 2


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Notification:
    """A desktop notification."""

    id: int
    app_name: str
    summary: str
    body: str
    app_icon: str = ""
    urgency: NotificationUrgency = NotificationUrgency.NORMAL
    timestamp: datetime = field(default_factory=_now)
    actions: list[str] = field(default_factory=list)


class NetworkConnectionType(Enum):
    WIFI = "wifi"
    ETHERNET = "ethernet"
    NONE = "none"


@dataclass(frozen=True)
class NetworkConnection:
    """The active network link; signal strength is 0-100, speed in Mbps."""

    connection_type: NetworkConnectionType
    is_connected: bool
    interface_name: str
    ssid: str | None = None
    signal_strength: int | None = None
    speed: int | None = None


class WiFiSecurity(Enum):
    NONE = "none"
    WEP = "wep"
    WPA = "wpa"
    WPA2 = "wpa2"
    WPA3 = "wpa3"
    ENTERPRISE = "enterprise"


@dataclass(frozen=True)
class WiFiNetwork:
    """A visible wireless network."""

    ssid: str
    signal_strength: int
    security: WiFiSecurity
    in_use: bool = False


@dataclass(frozen=True)
class SystemResources:
    """CPU and memory use; the usages are percentages."""

    cpu_usage: float
    memory_usage: float
    memory_used_gb: float
    memory_total_gb: float


@dataclass(frozen=True)
class KeyboardLayout:
    """A keyboard layout: the compositor's name and a short display name."""

    short_name: str
    full_name: str