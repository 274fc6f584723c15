"""The registry that tray items announce themselves to."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

_PROTOCOL_VERSION = 0


def _service_name(item: str) -> str:
    return item.split("/", 1)[0]


class StatusNotifierWatcher:
    """Keeps the list of registered tray items and reports changes to it.

    ``on_registered`` and ``on_unregistered`` are called with the item's
    service string whenever an item is added or removed.
    """

    def __init__(
        self,
        on_registered: Callable[[str], None] | None = None,
        on_unregistered: Callable[[str], None] | None = None,
    ) -> None:
        self.on_registered = on_registered
        self.on_unregistered = on_unregistered
        self._items: list[str] = []
        self._hosts: list[str] = []
        self._lock = threading.Lock()

    def _announce_removed(self, item: str) -> None:
        if self.on_unregistered is not None:
            self.on_unregistered(item)

    def register_status_notifier_item(self, service: str) -> bool:
        """Add an item unless it is already known; return whether it was added."""
        with self._lock:
            if service in self._items:
                return False
            self._items.append(service)
        logger.info("Registered: %s", service)
        if self.on_registered is not None:
            self.on_registered(service)
        return True

    def unregister_status_notifier_item(self, service: str) -> bool:
        """Remove an item; return whether anything was removed."""
        with self._lock:
            before = len(self._items)
            self._items = [item for item in self._items if item != service]
            removed = len(self._items) != before
        if removed:
            logger.info("Unregistered: %s", service)
            self._announce_removed(service)
        return removed

    def register_status_notifier_host(self, service: str) -> bool:
        """Record a host registration; return whether the host was new."""
        with self._lock:
            is_new = service not in self._hosts
            if is_new:
                self._hosts.append(service)
        logger.info("Host registered")
        return is_new

    def registered_status_notifier_items(self) -> list[str]:
        """The registered items, in registration order."""
        with self._lock:
            return list(self._items)

    def is_status_notifier_host_registered(self) -> bool:
        """A host is always present: this process is one."""
        return True

    def protocol_version(self) -> int:
        """The protocol version served."""
        return _PROTOCOL_VERSION

    def handle_name_owner_changed(
        self, name: str, old_owner: str | None, new_owner: str | None
    ) -> list[str]:
        """Drop the items of a bus name that has vanished; return the dropped items.

        A name vanishes when it had an owner and now has none. Items are
        matched on the part before the first ``/``.
        """
        if not old_owner or new_owner:
            return []
        with self._lock:
            removed = [item for item in self._items if _service_name(item) == name]
            self._items = [item for item in self._items if _service_name(item) != name]
        for item in removed:
            logger.info("Auto-removed: %s", item)
            self._announce_removed(item)
        return removed

    def get_registered_items(self) -> list[str]:
        """The registered items, in registration order."""
        return self.registered_status_notifier_items()