"""The active keyboard layout as reported by the compositor's device list."""

from __future__ import annotations

import json
import subprocess
from collections.abc import Mapping

from hyprline.models import KeyboardLayout
from hyprline.services import KeyboardLayoutService

_DISPLAY_NAMES = {
    "russian": "RU",
    "ru": "RU",
    "english (us)": "US",
    "us": "US",
    "english": "US",
    "german": "DE",
    "de": "DE",
    "french": "FR",
    "fr": "FR",
    "spanish": "ES",
    "es": "ES",
    "italian": "IT",
    "it": "IT",
    "portuguese": "PT",
    "pt": "PT",
    "polish": "PL",
    "pl": "PL",
    "ukrainian": "UA",
    "ua": "UA",
    "japanese": "JP",
    "jp": "JP",
    "korean": "KR",
    "kr": "KR",
    "chinese": "CN",
    "cn": "CN",
}


def layout_display_name(short_name: str) -> str:
    """Short upper-case code for a layout name, e.g. ``Russian`` -> ``RU``."""
    known = _DISPLAY_NAMES.get(short_name.lower())
    return known if known is not None else short_name[:2].upper()


def parse_devices(output: str) -> KeyboardLayout | None:
    """Pick the layout of the last keyboard with an active keymap.

    ``output`` is the JSON device list; None when it holds no usable keyboard.
    """
    try:
        devices = json.loads(output)
    except ValueError:
        return None
    if not isinstance(devices, Mapping):
        return None
    keyboards = devices.get("keyboards")
    if not isinstance(keyboards, list):
        return None
    found: KeyboardLayout | None = None
    for keyboard in keyboards:
        if not isinstance(keyboard, Mapping):
            continue
        keymap = keyboard.get("active_keymap")
        if isinstance(keymap, str) and keymap:
            found = KeyboardLayout(short_name=keymap, full_name=layout_display_name(keymap))
    return found


class HyprlandKeyboardLayoutService(KeyboardLayoutService):
    """Reads the layout with ``hyprctl devices -j``."""

    def get_current_layout(self) -> KeyboardLayout | None:
        """The active layout, or None when hyprctl fails or reports none."""
        try:
            result = subprocess.run(
                ["hyprctl", "devices", "-j"], capture_output=True, check=False
            )
        except OSError:
            return None
        if result.returncode != 0:
            return None
        return parse_devices(result.stdout.decode("utf-8", errors="replace"))