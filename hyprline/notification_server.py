"""The notification daemon's request handling and history access."""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Callable, Mapping
from typing import Any

from hyprline.models import Notification, NotificationUrgency
from hyprline.notification_repository import NotificationRepository
from hyprline.services import NotificationService

logger = logging.getLogger(__name__)

_CAPABILITIES = ("body", "body-markup", "actions", "icon-static", "persistence")
_SERVER_INFORMATION = ("Hyprline", "Hyprline", "0.1.0", "1.2")


def urgency_from_hints(hints: Mapping[str, Any]) -> NotificationUrgency:
    """Read the byte-valued ``urgency`` hint; anything unusable means NORMAL."""
    value = hints.get("urgency")
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        return NotificationUrgency.NORMAL
    if value == 0:
        return NotificationUrgency.LOW
    if value == 2:
        return NotificationUrgency.CRITICAL
    return NotificationUrgency.NORMAL


class NotificationDaemon(NotificationService):
    """Handles notification requests, stores them and hands them on for display."""

    def __init__(
        self,
        repository: NotificationRepository,
        sink: Callable[[Notification], None] | None = None,
    ) -> None:
        self.repository = repository
        self.sink = sink
        self._next_id = repository.get_max_id() + 1
        self._lock = threading.Lock()

    def notify(
        self,
        app_name: str,
        replaces_id: int,
        app_icon: str,
        summary: str,
        body: str,
        actions: list[str],
        hints: Mapping[str, Any],
        expire_timeout: int,
    ) -> int:
        """Record a notification and return its id; ``expire_timeout`` is ignored."""
        if replaces_id > 0:
            try:
                self.repository.delete(replaces_id)
            except sqlite3.Error:
                pass
            notification_id = replaces_id
        else:
            with self._lock:
                notification_id = self._next_id
                self._next_id += 1

        notification = Notification(
            id=notification_id,
            app_name=app_name,
            summary=summary,
            body=body,
            app_icon=app_icon,
            urgency=urgency_from_hints(hints),
            actions=list(actions),
        )
        try:
            self.repository.save(notification)
        except sqlite3.Error as exc:
            logger.error("Error saving notification: %s", exc)

        if self.sink is not None:
            self.sink(notification)
        return notification_id

    def close_notification(self, id: int) -> None:
        """Acknowledge a close request; the notification stays in the history."""

    def get_capabilities(self) -> list[str]:
        """The optional features this server supports."""
        return list(_CAPABILITIES)

    def get_server_information(self) -> tuple[str, str, str, str]:
        """Name, vendor, version and protocol version."""
        return _SERVER_INFORMATION

    def get_history(self) -> list[Notification]:
        """Stored notifications, newest first."""
        return self.repository.load_all()

    def clear_history(self) -> None:
        """Remove every stored notification; failures are logged."""
        try:
            deleted = self.repository.delete_all()
        except sqlite3.Error as exc:
            logger.error("Error clearing history: %s", exc)
            return
        logger.info("Cleared %d notifications", deleted)

    def remove_notification(self, id: int) -> None:
        """Remove one stored notification; failures are logged."""
        try:
            deleted = self.repository.delete(id)
        except sqlite3.Error as exc:
            logger.error("Error removing notification: %s", exc)
            return
        if deleted > 0:
            logger.info("Removed notification id=%d", id)
        else:
            logger.info("Notification id=%d not found", id)