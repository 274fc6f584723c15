"""Data and actions behind a Hyprland status bar: workspaces, events, clock, resources,
volume, battery, notifications and tray."""

__version__ = "0.1.0"