"""Reading workspace key bindings from the compositor's configuration."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")


def hyprland_config_path(env: Mapping[str, str] | None = None) -> Path | None:
    """Return the compositor config path, or None when no base directory is set."""
    env = os.environ if env is None else env
    if "XDG_CONFIG_HOME" in env:
        return Path(f"{env['XDG_CONFIG_HOME']}/hypr/hyprland.conf")
    if "HOME" in env:
        return Path(f"{env['HOME']}/.config/hypr/hyprland.conf")
    return None


def _parse_i32(text: str) -> int | None:
    if not _INTEGER.fullmatch(text):
        return None
    value = int(text)
    return value if _I32_MIN <= value <= _I32_MAX else None


def parse_workspace_bindings(path: str | os.PathLike[str] | None = None) -> dict[int, str]:
    """Map workspace ids to the key bound to them.

    Reads ``bind`` lines that mention ``workspace``; the key is the second
    comma-separated field (upper-cased) and the workspace the fourth. Later
    bindings win. An unreadable or missing file yields an empty mapping.
    """
    config_path = hyprland_config_path() if path is None else Path(path)
    if config_path is None:
        return {}
    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return {}

    bindings: dict[int, str] = {}
    for raw in content.split("\n"):
        line = raw.strip()
        if line.startswith("#"):
            continue
        if not (line.startswith("bind") and "workspace" in line):
            continue
        parts = line.split(",")
        if len(parts) < 4:
            continue
        workspace_id = _parse_i32(parts[3].strip())
        if workspace_id is not None:
            bindings[workspace_id] = parts[1].strip().upper()
    return bindings