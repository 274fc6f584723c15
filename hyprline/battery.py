"""Battery state built from the power daemon's device properties."""

from __future__ import annotations

import math
import threading
from collections.abc import Mapping
from typing import Any

from hyprline.models import BatteryInfo, BatteryStatus
from hyprline.services import BatteryService

_U32_MAX = 2**32 - 1

_STATES = {
    1: BatteryStatus.CHARGING,
    2: BatteryStatus.DISCHARGING,
    3: BatteryStatus.DISCHARGING,
    4: BatteryStatus.FULL,
    5: BatteryStatus.NOT_CHARGING,
    6: BatteryStatus.NOT_CHARGING,
}


def battery_status_from_state(state: int) -> BatteryStatus:
    """Map the power daemon's ``State`` number to a status."""
    return _STATES.get(state, BatteryStatus.UNKNOWN)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _percentage(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    return min(math.floor(value + 0.5), 100)


def _minutes(seconds: int) -> int | None:
    return seconds // 60 if seconds > 0 else None


def battery_info_from_properties(properties: Mapping[str, Any]) -> BatteryInfo | None:
    """Build battery info from ``Percentage``, ``State``, ``TimeToEmpty`` and ``TimeToFull``.

    Returns None when any of them is missing or of the wrong type.
    """
    percentage = properties.get("Percentage")
    state = properties.get("State")
    to_empty = properties.get("TimeToEmpty")
    to_full = properties.get("TimeToFull")
    if isinstance(percentage, bool) or not isinstance(percentage, (int, float)):
        return None
    if not _is_int(state) or not 0 <= state <= _U32_MAX:
        return None
    if not _is_int(to_empty) or not _is_int(to_full):
        return None
    return BatteryInfo(
        percentage=_percentage(float(percentage)),
        status=battery_status_from_state(state),
        time_to_empty=_minutes(to_empty),
        time_to_full=_minutes(to_full),
    )


class SystemBatteryService(BatteryService):
    """Caches the battery state from the latest property update."""

    def __init__(self) -> None:
        self._info: BatteryInfo | None = None
        self._lock = threading.Lock()

    def update(self, properties: Mapping[str, Any]) -> BatteryInfo | None:
        """Refresh the cache from device properties; unusable ones keep the old state."""
        info = battery_info_from_properties(properties)
        if info is not None:
            with self._lock:
                self._info = info
        return info

    def get_battery_info(self) -> BatteryInfo | None:
        """The cached battery state."""
        with self._lock:
            return self._info