"""Tray item data built from status-notifier properties, and the set of known items."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from typing import Any

from hyprline.models import MenuItem, TrayItem, TrayStatus

logger = logging.getLogger(__name__)

DEFAULT_ITEM_PATH = "/StatusNotifierItem"
_GENERIC_ICON = "application-x-executable"


def split_service(service: str) -> tuple[str, str]:
    """Split ``name/path`` into bus name and object path.

    Without a ``/`` the default item path is used.
    """
    position = service.find("/")
    if position < 0:
        return service, DEFAULT_ITEM_PATH
    return service[:position], service[position:]


def tray_status_from_string(value: str) -> TrayStatus:
    """Map an item's ``Status`` property; anything unknown is ACTIVE."""
    if value == "Passive":
        return TrayStatus.PASSIVE
    if value == "NeedsAttention":
        return TrayStatus.NEEDS_ATTENTION
    return TrayStatus.ACTIVE


def _text(properties: Mapping[str, Any], key: str) -> str | None:
    value = properties.get(key)
    return value if isinstance(value, str) else None


def _pixmap(value: Any) -> list[tuple[int, int, bytes]] | None:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        return None
    images = []
    for entry in value:
        if not isinstance(entry, Sequence) or len(entry) != 3:
            return None
        width, height, data = entry
        if isinstance(width, bool) or isinstance(height, bool):
            return None
        if not isinstance(width, int) or not isinstance(height, int):
            return None
        if not isinstance(data, (bytes, bytearray, list)):
            return None
        images.append((width, height, bytes(data)))
    return images


def build_tray_item(service: str, properties: Mapping[str, Any]) -> TrayItem:
    """Build a tray item from its properties (``Title``, ``Status``, ``IconName`` ...).

    The icon is the attention icon when the item needs attention, else the
    icon name; the pixmap is kept only when there is no usable icon name.
    """
    service_name, _ = split_service(service)
    title = _text(properties, "Title")
    if title is None:
        title = service_name
    status = tray_status_from_string(_text(properties, "Status") or "Active")

    icon_name = ""
    if status is TrayStatus.NEEDS_ATTENTION:
        icon_name = _text(properties, "AttentionIconName") or ""
    if not icon_name:
        icon_name = _text(properties, "IconName") or ""

    icon_theme_path = _text(properties, "IconThemePath") or None

    icon_pixmap = None
    if not icon_name or icon_name == _GENERIC_ICON:
        icon_pixmap = _pixmap(properties.get("IconPixmap")) or None

    return TrayItem(
        service=service,
        icon_name=icon_name,
        title=title,
        status=status,
        icon_pixmap=icon_pixmap,
        icon_theme_path=icon_theme_path,
        menu_path=_text(properties, "Menu"),
    )


def _menu_item(child: Any) -> MenuItem | None:
    if not isinstance(child, Sequence) or isinstance(child, (str, bytes)) or len(child) < 2:
        return None
    raw_id, props = child[0], child[1]
    item_id = raw_id if isinstance(raw_id, int) and not isinstance(raw_id, bool) else 0
    if not isinstance(props, Mapping):
        return None
    label = ""
    enabled = True
    visible = True
    is_separator = False
    for key, value in props.items():
        if key == "label" and isinstance(value, str):
            label = value
        elif key == "enabled" and isinstance(value, bool):
            enabled = value
        elif key == "visible" and isinstance(value, bool):
            visible = value
        elif key == "type" and isinstance(value, str):
            is_separator = value == "separator"
    return MenuItem(
        id=item_id, label=label, enabled=enabled, visible=visible, is_separator=is_separator
    )


def parse_menu_layout(layout: Sequence[Any]) -> list[MenuItem]:
    """Read the top-level entries of a menu layout ``(id, properties, children)``.

    Each child is itself ``(id, properties, children)``; malformed children
    are skipped. Raises ``ValueError`` when the layout itself is malformed.
    """
    if not isinstance(layout, Sequence) or isinstance(layout, (str, bytes)) or len(layout) != 3:
        raise ValueError("menu layout must be (id, properties, children)")
    children = layout[2]
    if not isinstance(children, Sequence) or isinstance(children, (str, bytes)):
        raise ValueError("menu layout children must be a sequence")
    return [item for item in map(_menu_item, children) if item is not None]


class TrayRegistry:
    """The tray items currently shown, in the order they appeared."""

    def __init__(self) -> None:
        self._items: list[TrayItem] = []
        self._lock = threading.Lock()

    def add(self, item: TrayItem) -> bool:
        """Add ``item`` unless one with the same service is known; return whether added."""
        with self._lock:
            if any(existing.service == item.service for existing in self._items):
                return False
            self._items.append(item)
        logger.info("Added: %s (%s)", item.title, item.service)
        return True

    def remove(self, service: str) -> list[TrayItem]:
        """Remove the items of ``service`` and return them."""
        with self._lock:
            removed = [item for item in self._items if item.service == service]
            self._items = [item for item in self._items if item.service != service]
        for item in removed:
            logger.info("Removed: %s (%s)", item.title, item.service)
        return removed

    def items(self) -> list[TrayItem]:
        """A copy of the known items."""
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        """Forget every item."""
        with self._lock:
            self._items.clear()