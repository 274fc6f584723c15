"""Persistent notification history stored in SQLite."""

from __future__ import annotations

import json
import os
import sqlite3
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from hyprline.models import Notification, NotificationUrgency

_U32_MAX = 2**32 - 1
_HISTORY_LIMIT = 100

_SCHEMA = (
    """CREATE TABLE IF NOT EXISTS notifications (
        id INTEGER PRIMARY KEY,
        app_name TEXT NOT NULL,
        summary TEXT NOT NULL,
        body TEXT NOT NULL,
        app_icon TEXT NOT NULL,
        urgency INTEGER NOT NULL,
        timestamp INTEGER NOT NULL,
        actions TEXT NOT NULL
    )""",
    "CREATE INDEX IF NOT EXISTS idx_timestamp ON notifications(timestamp DESC)",
)


def default_db_path(env: Mapping[str, str] | None = None) -> Path:
    """Return the database path under the user's data directory, creating the directory."""
    env = os.environ if env is None else env
    if "XDG_DATA_HOME" in env:
        data_dir = env["XDG_DATA_HOME"]
    elif "HOME" in env:
        data_dir = f"{env['HOME']}/.local/share"
    else:
        raise RuntimeError("HOME not set")
    app_dir = Path(data_dir) / "hyprline"
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir / "notifications.db"


def _urgency(value: int) -> NotificationUrgency:
    if value == 0:
        return NotificationUrgency.LOW
    if value == 2:
        return NotificationUrgency.CRITICAL
    return NotificationUrgency.NORMAL


def _actions(raw: str) -> list[str]:
    try:
        value = json.loads(raw)
    except ValueError:
        return []
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return value
    return []


def _row_to_notification(row: tuple) -> Notification:
    id_, app_name, summary, body, app_icon, urgency, timestamp, actions = row
    if not isinstance(id_, int) or not 0 <= id_ <= _U32_MAX:
        raise ValueError("bad id")
    if not all(isinstance(v, str) for v in (app_name, summary, body, app_icon, actions)):
        raise ValueError("bad text column")
    if not isinstance(urgency, int) or not isinstance(timestamp, int):
        raise ValueError("bad integer column")
    return Notification(
        id=id_,
        app_name=app_name,
        summary=summary,
        body=body,
        app_icon=app_icon,
        urgency=_urgency(urgency),
        timestamp=datetime.fromtimestamp(timestamp, timezone.utc),
        actions=_actions(actions),
    )


class NotificationRepository:
    """Stores notifications in an SQLite database file."""

    def __init__(self, db_path: str | os.PathLike[str] | None = None) -> None:
        self.db_path = default_db_path() if db_path is None else Path(db_path)
        with self._connect() as conn:
            for statement in _SCHEMA:
                conn.execute(statement)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def save(self, notification: Notification) -> None:
        """Insert a notification; raises ``sqlite3.Error`` on failure, e.g. a duplicate id."""
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO notifications "
                "(id, app_name, summary, body, app_icon, urgency, timestamp, actions) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    notification.id,
                    notification.app_name,
                    notification.summary,
                    notification.body,
                    notification.app_icon,
                    notification.urgency.value,
                    int(notification.timestamp.timestamp()),
                    json.dumps(notification.actions),
                ),
            )

    def load_all(self) -> list[Notification]:
        """Return the newest 100 notifications, newest first; empty on any error."""
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    "SELECT id, app_name, summary, body, app_icon, urgency, timestamp, actions "
                    "FROM notifications ORDER BY timestamp DESC LIMIT ?",
                    (_HISTORY_LIMIT,),
                ).fetchall()
        except sqlite3.Error:
            return []
        notifications = []
        for row in rows:
            try:
                notifications.append(_row_to_notification(row))
            except (ValueError, OverflowError, OSError):
                continue
        return notifications

    def delete(self, id: int) -> int:
        """Delete one notification and return how many rows went."""
        with self._connect() as conn:
            return conn.execute("DELETE FROM notifications WHERE id = ?", (id,)).rowcount

    def delete_all(self) -> int:
        """Delete every notification and return how many rows went."""
        with self._connect() as conn:
            return conn.execute("DELETE FROM notifications").rowcount

    def get_max_id(self) -> int:
        """Return the highest stored id, or 0 when there is none or it cannot be read."""
        try:
            with self._connect() as conn:
                (value,) = conn.execute("SELECT MAX(id) FROM notifications").fetchone()
        except sqlite3.Error:
            return 0
        if isinstance(value, int) and 0 <= value <= _U32_MAX:
            return value
        return 0