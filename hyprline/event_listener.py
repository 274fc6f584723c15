"""Listening to the compositor's event socket."""

from __future__ import annotations

import logging
import os
import socket
import threading
from collections.abc import Callable, Mapping
from pathlib import Path

from hyprline.hyprland_ipc import find_hypr_socket

logger = logging.getLogger(__name__)

_EVENT_SOCKET = ".socket2.sock"
_CHUNK = 1024
_RECONNECT_DELAY = 0.1
_READ_TIMEOUT = 0.1
_WORKSPACE_EVENTS = (
    "workspace",
    "monitor",
    "focusedmon",
    "activewindow",
    "closewindow",
    "openwindow",
)


def find_event_socket(env: Mapping[str, str] | None = None) -> str | None:
    """Locate the compositor's event socket, searching instance directories."""
    return find_hypr_socket(_EVENT_SOCKET, env)


def find_layout_event_socket(env: Mapping[str, str] | None = None) -> str | None:
    """Locate the event socket from the instance signature alone."""
    env = os.environ if env is None else env
    signature = env.get("HYPRLAND_INSTANCE_SIGNATURE")
    if signature is None:
        return None
    runtime_dir = env.get("XDG_RUNTIME_DIR")
    if runtime_dir is not None:
        candidate = Path(f"{runtime_dir}/hypr/{signature}/{_EVENT_SOCKET}")
        if candidate.exists():
            return str(candidate)
    return f"/tmp/hypr/{signature}/{_EVENT_SOCKET}"


def is_workspace_event(event: str) -> bool:
    """Whether ``event`` text concerns workspaces, monitors or windows."""
    return any(name in event for name in _WORKSPACE_EVENTS)


def is_layout_event(event: str) -> bool:
    """Whether ``event`` text reports a keyboard layout change."""
    return "activelayout" in event


def _pump(
    conn: socket.socket,
    predicate: Callable[[str], bool],
    callback: Callable[[], None],
    stop: threading.Event,
) -> None:
    while not stop.is_set():
        try:
            chunk = conn.recv(_CHUNK)
        except TimeoutError:
            continue
        if not chunk:
            return
        if predicate(chunk.decode("utf-8", errors="replace")):
            callback()


def watch_events(
    socket_path: str | os.PathLike[str],
    predicate: Callable[[str], bool],
    callback: Callable[[], None],
    stop: threading.Event | None = None,
) -> None:
    """Read events, calling ``callback`` for each chunk ``predicate`` accepts.

    Reconnects after a short pause whenever the connection ends; returns
    once ``stop`` is set.
    """
    if stop is None:
        stop = threading.Event()
    path = os.fspath(socket_path)
    while not stop.is_set():
        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as conn:
                conn.connect(path)
                conn.settimeout(_READ_TIMEOUT)
                _pump(conn, predicate, callback, stop)
        except OSError:
            pass
        stop.wait(_RECONNECT_DELAY)


def _start(
    socket_path: str | os.PathLike[str] | None,
    predicate: Callable[[str], bool],
    callback: Callable[[], None],
    name: str,
) -> threading.Event:
    stop = threading.Event()
    if socket_path is None:
        logger.warning("%s: event socket not found, not listening", name)
        stop.set()
        return stop
    threading.Thread(
        target=watch_events,
        args=(socket_path, predicate, callback, stop),
        name=name,
        daemon=True,
    ).start()
    return stop


def start_event_listener(
    callback: Callable[[], None],
    socket_path: str | os.PathLike[str] | None = None,
) -> threading.Event:
    """Call ``callback`` on workspace-related events in a background thread.

    Returns an event that stops the listener when set.
    """
    path = find_event_socket() if socket_path is None else socket_path
    return _start(path, is_workspace_event, callback, "event-listener")


def start_keyboard_layout_listener(
    sink: Callable[[], None],
    socket_path: str | os.PathLike[str] | None = None,
) -> threading.Event:
    """Call ``sink`` on every keyboard layout change in a background thread.

    Returns an event that stops the listener when set.
    """
    path = find_layout_event_socket() if socket_path is None else socket_path
    return _start(path, is_layout_event, sink, "keyboard-layout-listener")