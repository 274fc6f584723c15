"""Which widgets the bar shows, and where."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class WidgetZone(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class WidgetType(Enum):
    MENU = "menu"
    WORKSPACES = "workspaces"
    ACTIVE_WINDOW = "activewindow"
    DATE_TIME = "datetime"
    SYSTEM_TRAY = "systemtray"
    BATTERY = "battery"
    VOLUME = "volume"
    NOTIFICATIONS = "notifications"
    KEYBOARD_LAYOUT = "keyboardlayout"
    SYSTEM_RESOURCES = "systemresources"
    NETWORK = "network"
    BRIGHTNESS = "brightness"


@dataclass(frozen=True)
class WidgetConfig:
    """Placement of one widget."""

    zone: WidgetZone
    order: int


_DEFAULT_LAYOUT: tuple[tuple[WidgetType, WidgetZone, int], ...] = (
    (WidgetType.MENU, WidgetZone.LEFT, 0),
    (WidgetType.WORKSPACES, WidgetZone.LEFT, 1),
    (WidgetType.ACTIVE_WINDOW, WidgetZone.LEFT, 2),
    (WidgetType.DATE_TIME, WidgetZone.RIGHT, 1),
    (WidgetType.SYSTEM_TRAY, WidgetZone.RIGHT, 0),
    (WidgetType.BATTERY, WidgetZone.RIGHT, 2),
    (WidgetType.VOLUME, WidgetZone.RIGHT, 3),
    (WidgetType.KEYBOARD_LAYOUT, WidgetZone.RIGHT, 4),
    (WidgetType.NOTIFICATIONS, WidgetZone.RIGHT, 5),
    (WidgetType.SYSTEM_RESOURCES, WidgetZone.RIGHT, 6),
    (WidgetType.NETWORK, WidgetZone.RIGHT, 7),
    (WidgetType.BRIGHTNESS, WidgetZone.RIGHT, 8),
)


def _enum_value(enum: type[Enum], raw: Any, what: str) -> Any:
    try:
        return enum(raw)
    except ValueError:
        raise ValueError(f"unknown {what}: {raw!r}") from None


@dataclass
class BarConfig:
    """The set of widgets on the bar with their placements."""

    widgets: dict[WidgetType, WidgetConfig] = field(default_factory=dict)

    @classmethod
    def default(cls) -> BarConfig:
        """The built-in layout."""
        return cls(
            {kind: WidgetConfig(zone=zone, order=order) for kind, zone, order in _DEFAULT_LAYOUT}
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BarConfig:
        """Build from ``{"widgets": {"<type>": {"zone": ..., "order": ...}}}``."""
        if not isinstance(data, Mapping) or "widgets" not in data:
            raise ValueError("bar configuration needs a 'widgets' object")
        raw_widgets = data["widgets"]
        if not isinstance(raw_widgets, Mapping):
            raise ValueError("'widgets' must be an object")
        widgets: dict[WidgetType, WidgetConfig] = {}
        for name, entry in raw_widgets.items():
            kind = _enum_value(WidgetType, name, "widget type")
            if not isinstance(entry, Mapping) or "zone" not in entry or "order" not in entry:
                raise ValueError(f"widget {name!r} needs 'zone' and 'order'")
            zone = _enum_value(WidgetZone, entry["zone"], "widget zone")
            order = entry["order"]
            if isinstance(order, bool) or not isinstance(order, int) or order < 0:
                raise ValueError(f"widget {name!r} order must be a non-negative integer")
            widgets[kind] = WidgetConfig(zone=zone, order=order)
        return cls(widgets)

    def widgets_in_zone(self, zone: WidgetZone) -> list[WidgetType]:
        """Widgets placed in ``zone``, sorted by their order."""
        placed = [(cfg.order, kind) for kind, cfg in self.widgets.items() if cfg.zone is zone]
        placed.sort(key=lambda pair: pair[0])
        return [kind for _, kind in placed]


def load_bar_config() -> BarConfig:
    """Return the bar configuration in effect."""
    return BarConfig.default()