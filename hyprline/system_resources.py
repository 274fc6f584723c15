"""CPU and memory usage read from the kernel's proc files."""

from __future__ import annotations

import os
import re
import threading
from dataclasses import dataclass
from pathlib import Path

from hyprline.models import SystemResources
from hyprline.services import SystemResourcesService

_U64 = re.compile(r"\+?[0-9]+")
_U64_MAX = 2**64 - 1


def _parse_u64(text: str) -> int | None:
    if not _U64.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U64_MAX else None


@dataclass(frozen=True)
class CpuStats:
    """Aggregate CPU jiffies: the sum of all counters and the idle counter."""

    total: int
    idle: int


def parse_cpu_stats(text: str) -> CpuStats | None:
    """Parse the aggregate ``cpu`` line of ``/proc/stat``."""
    lines = text.splitlines()
    if not lines or not lines[0].startswith("cpu "):
        return None
    values = [v for v in map(_parse_u64, lines[0].split()[1:]) if v is not None]
    if len(values) < 4:
        return None
    return CpuStats(total=sum(values), idle=values[3])


def _meminfo_value(line: str) -> int | None:
    fields = line.split()
    return _parse_u64(fields[1]) if len(fields) > 1 else None


def parse_memory_info(text: str) -> tuple[float, float, float] | None:
    """Return ``(usage_percent, used_gb, total_gb)`` from ``/proc/meminfo`` text."""
    total: int | None = None
    available: int | None = None
    for line in text.splitlines():
        if line.startswith("MemTotal:"):
            total = _meminfo_value(line)
        elif line.startswith("MemAvailable:"):
            available = _meminfo_value(line)
        if total is not None and available is not None:
            break
    if total is None or available is None:
        return None

    used = max(total - available, 0)
    total_gb = total / 1024.0 / 1024.0
    used_gb = used / 1024.0 / 1024.0
    usage = used / total * 100.0 if total > 0 else 0.0
    return usage, used_gb, total_gb


def _read(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


class LinuxSystemResources(SystemResourcesService):
    """CPU use between successive calls, and current memory use."""

    def __init__(
        self,
        stat_path: str | os.PathLike[str] = "/proc/stat",
        meminfo_path: str | os.PathLike[str] = "/proc/meminfo",
    ) -> None:
        self._stat_path = Path(stat_path)
        self._meminfo_path = Path(meminfo_path)
        self._last: CpuStats | None = None
        self._lock = threading.Lock()

    def cpu_usage(self) -> float:
        """CPU use in percent since the previous call; 0.0 on the first call."""
        text = _read(self._stat_path)
        current = parse_cpu_stats(text) if text is not None else None
        if current is None:
            return 0.0
        with self._lock:
            last, self._last = self._last, current
        if last is None:
            return 0.0
        total_diff = max(current.total - last.total, 0)
        idle_diff = max(current.idle - last.idle, 0)
        if total_diff == 0:
            return 0.0
        usage = 100.0 * (1.0 - idle_diff / total_diff)
        return min(max(usage, 0.0), 100.0)

    def get_resources(self) -> SystemResources | None:
        """Return current usage, or None when memory figures cannot be read."""
        cpu = self.cpu_usage()
        text = _read(self._meminfo_path)
        memory = parse_memory_info(text) if text is not None else None
        if memory is None:
            return None
        usage, used_gb, total_gb = memory
        return SystemResources(
            cpu_usage=cpu,
            memory_usage=usage,
            memory_used_gb=used_gb,
            memory_total_gb=total_gb,
        )