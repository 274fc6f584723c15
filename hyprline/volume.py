"""Output volume control through the ``wpctl`` command."""

from __future__ import annotations

import logging
import math
import subprocess
import threading
from collections.abc import Callable

from hyprline.models import VolumeInfo
from hyprline.services import VolumeService

logger = logging.getLogger(__name__)

_DEFAULT_SINK = "@DEFAULT_AUDIO_SINK@"


class VolumeError(Exception):
    """A volume change could not be applied."""


def _to_percent(value: float) -> int:
    scaled = value * 100.0
    if math.isnan(scaled) or scaled <= 0:
        return 0
    if scaled >= 255:
        return 255
    return min(math.floor(scaled + 0.5), 255)


def parse_volume_output(output: str) -> VolumeInfo | None:
    """Parse ``wpctl get-volume`` output such as ``Volume: 0.45 [MUTED]``."""
    parts = output.split()
    if len(parts) < 2 or "_" in parts[1]:
        return None
    try:
        value = float(parts[1])
    except ValueError:
        return None
    return VolumeInfo(volume=_to_percent(value), muted="[MUTED]" in output)


def _query_volume() -> VolumeInfo | None:
    try:
        result = subprocess.run(
            ["wpctl", "get-volume", _DEFAULT_SINK], capture_output=True, check=False
        )
    except OSError:
        return None
    return parse_volume_output(result.stdout.decode("utf-8", errors="replace"))


def _wpctl(*args: str) -> None:
    try:
        result = subprocess.run(["wpctl", *args], capture_output=True, check=False)
    except OSError as exc:
        raise VolumeError(f"Failed to execute wpctl: {exc}") from exc
    if result.returncode != 0:
        raise VolumeError(f"wpctl failed with status: {result.returncode}")


class PipewireVolume(VolumeService):
    """Volume of the default audio sink, cached and refreshed by polling."""

    def __init__(self, poll_interval: float = 1.0) -> None:
        self.poll_interval = poll_interval
        self._info: VolumeInfo | None = None
        self._sinks: list[Callable[[], None]] = []
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def _notify(self) -> None:
        with self._lock:
            sinks = list(self._sinks)
        for sink in sinks:
            sink()

    def start_monitoring(self, sink: Callable[[], None]) -> None:
        """Register ``sink`` to be called on every change; starts polling once."""
        with self._lock:
            self._sinks.append(sink)
        info = _query_volume()
        if info is not None:
            with self._lock:
                self._info = info
        if self._thread is None:
            self._stop.clear()
            self._thread = threading.Thread(
                target=self._poll, name="volume-monitor", daemon=True
            )
            self._thread.start()

    def _poll(self) -> None:
        while not self._stop.wait(self.poll_interval):
            self.refresh()

    def stop(self) -> None:
        """Stop polling."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def refresh(self) -> VolumeInfo | None:
        """Re-read the volume; sinks are told only when it changed."""
        info = _query_volume()
        if info is None:
            return None
        with self._lock:
            changed = info != self._info
            self._info = info
        if changed:
            self._notify()
        return info

    def _after_change(self) -> None:
        info = _query_volume()
        if info is None:
            return
        with self._lock:
            self._info = info
        self._notify()

    def get_volume_info(self) -> VolumeInfo | None:
        """The cached volume."""
        with self._lock:
            return self._info

    def set_volume(self, volume: int) -> None:
        """Set the volume; values above 100 are capped."""
        if volume < 0:
            raise ValueError("volume must not be negative")
        volume = min(volume, 100)
        _wpctl("set-volume", _DEFAULT_SINK, f"{volume / 100:.2f}")
        self._after_change()

    def toggle_mute(self) -> None:
        """Flip the mute state."""
        _wpctl("set-mute", _DEFAULT_SINK, "toggle")
        self._after_change()

    def set_mute(self, muted: bool) -> None:
        """Set the mute state."""
        _wpctl("set-mute", _DEFAULT_SINK, "1" if muted else "0")
        self._after_change()