"""Queries and commands sent over the compositor's control socket."""

from __future__ import annotations

import json
import logging
import os
import socket
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from hyprline.models import (
    ActiveWorkspace,
    Monitor,
    MonitorInfo,
    MonitorWithWorkspace,
    Workspace,
)
from hyprline.services import WorkspaceService

logger = logging.getLogger(__name__)

_FALLBACK_ROOT = "/tmp/hypr"
_CHUNK = 4096


def _scan(root: Path, filename: str) -> str | None:
    try:
        entries = sorted(root.iterdir())
    except OSError:
        return None
    for entry in entries:
        candidate = entry / filename
        if entry.is_dir() and candidate.exists():
            return str(candidate)
    return None


def find_hypr_socket(
    filename: str,
    env: Mapping[str, str] | None = None,
    fallback_root: str | os.PathLike[str] = _FALLBACK_ROOT,
) -> str | None:
    """Locate one of the compositor's sockets.

    With an instance signature set, the runtime-dir socket is used when it
    exists and the fallback-root path otherwise. Without one, the instance
    directories under the runtime dir and then under the fallback root are
    searched for ``filename``.
    """
    env = os.environ if env is None else env
    root = Path(fallback_root)
    signature = env.get("HYPRLAND_INSTANCE_SIGNATURE")
    runtime_dir = env.get("XDG_RUNTIME_DIR")
    if signature is not None:
        if runtime_dir is not None:
            candidate = Path(f"{runtime_dir}/hypr/{signature}/{filename}")
            if candidate.exists():
                return str(candidate)
        return str(root / signature / filename)
    if runtime_dir is not None:
        found = _scan(Path(f"{runtime_dir}/hypr"), filename)
        if found is not None:
            return found
    return _scan(root, filename)


def find_control_socket(env: Mapping[str, str] | None = None) -> str | None:
    """Locate the compositor's control socket."""
    return find_hypr_socket(".socket.sock", env)


class HyprlandIpc(WorkspaceService):
    """Workspace service backed by the compositor's control socket.

    Without an explicit ``socket_path`` the socket is looked up on every request.
    """

    def __init__(self, socket_path: str | os.PathLike[str] | None = None) -> None:
        self.socket_path = None if socket_path is None else os.fspath(socket_path)

    def _socket(self) -> str | None:
        return self.socket_path if self.socket_path is not None else find_control_socket()

    def send_request(self, command: str) -> str:
        """Send ``command`` and return the whole reply.

        JSON queries (``j/...``) are sent in batch form. Raises
        ``FileNotFoundError`` when no socket is found, ``OSError`` on socket
        errors and ``UnicodeDecodeError`` when the reply is not UTF-8.
        """
        path = self._socket()
        if path is None:
            raise FileNotFoundError("Hyprland control socket not found")
        payload = f"[[BATCH]]{command}" if command.startswith("j/") else command
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as conn:
            conn.connect(path)
            conn.sendall(payload.encode("utf-8"))
            chunks = []
            while chunk := conn.recv(_CHUNK):
                chunks.append(chunk)
        return b"".join(chunks).decode("utf-8")

    def _query(self, command: str) -> Any:
        try:
            return json.loads(self.send_request(command))
        except (OSError, ValueError):
            return None

    def _query_list(self, command: str, parse: Any) -> list:
        data = self._query(command)
        if not isinstance(data, list):
            return []
        try:
            return [parse(entry) for entry in data]
        except ValueError:
            return []

    def get_monitors(self) -> list[Monitor]:
        """Connected monitors; empty when the compositor cannot be asked."""
        return self._query_list("j/monitors", Monitor.from_dict)

    def get_workspaces(self) -> list[Workspace]:
        """All workspaces; empty when the compositor cannot be asked."""
        return self._query_list("j/workspaces", Workspace.from_dict)

    def get_active_workspace(self) -> int:
        """Id of the focused workspace; 1 when unknown."""
        data = self._query("j/activeworkspace")
        try:
            return ActiveWorkspace.from_dict(data).id
        except ValueError:
            return 1

    def get_active_monitor(self) -> str:
        """Name of the focused monitor; empty when unknown."""
        monitors = self._query_list("j/monitors", MonitorInfo.from_dict)
        return next((m.name for m in monitors if m.focused), "")

    def get_active_workspace_for_monitor(self, monitor_name: str) -> int | None:
        """Workspace shown on ``monitor_name``, or None."""
        monitors = self._query_list("j/monitors", MonitorWithWorkspace.from_dict)
        return next(
            (m.active_workspace_id for m in monitors if m.name == monitor_name), None
        )

    def get_active_window_title(self) -> str:
        """Title of the focused window; empty when there is none."""
        data = self._query("j/activewindow")
        if isinstance(data, Mapping) and isinstance(data.get("title"), str):
            return data["title"]
        return ""

    def switch_workspace(self, id: int) -> None:
        """Ask the compositor to focus workspace ``id``; failures are ignored."""
        path = self._socket()
        if path is None:
            return
        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as conn:
                conn.connect(path)
                conn.sendall(f"dispatch workspace {id}".encode("utf-8"))
        except OSError as exc:
            logger.debug("Workspace switch failed: %s", exc)