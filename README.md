# hyprline

The data and actions behind a status bar for the Hyprland compositor, for use
from any Python front end. The package draws nothing itself; it reads the
state a bar shows and carries out the actions a bar offers.

## What it covers

- **Workspaces and windows** (`hyprline.hyprland_ipc`) — `HyprlandIpc` talks
  to Hyprland's control socket: monitors, workspaces, the active workspace and
  monitor, the workspace shown on a given monitor, the active window title,
  and switching workspaces. Queries that fail return empty results (or
  workspace `1` for the active workspace); `send_request` raises instead.
  `find_control_socket` and `find_hypr_socket` locate the sockets from
  `HYPRLAND_INSTANCE_SIGNATURE` and `XDG_RUNTIME_DIR`.
- **Compositor events** (`hyprline.event_listener`) — `start_event_listener`
  calls back on workspace, monitor and window events, and
  `start_keyboard_layout_listener` on keyboard layout changes. Each runs in a
  background thread, reconnects when the socket closes, and returns a
  `threading.Event` that stops it when set.
- **Keyboard layout** (`hyprline.keyboard_layout`) —
  `HyprlandKeyboardLayoutService` runs `hyprctl devices -j` and reports the
  active keymap of the last keyboard that has one, with a short display name
  from `layout_display_name` such as `US` or `RU`.
- **Date and time** (`hyprline.datetime_format`) — `SystemDateTimeService`
  formats the clock by a `DateTimeConfig`: after the locale (12-hour for
  `en_US`, `en_CA`, `en_PH` and `fil_PH` in `LC_TIME` or `LANG`, 24-hour
  otherwise), a custom strftime pattern, time only, or date only.
  `estimated_width` gives a sample string for reserving space.
- **System resources** (`hyprline.system_resources`) —
  `LinuxSystemResources` reads CPU use between calls from `/proc/stat` and
  memory use from `/proc/meminfo`; the paths can be given.
- **Volume** (`hyprline.volume`) — `PipewireVolume` reads and changes the
  default audio sink through `wpctl`, caches the value and, once
  `start_monitoring` is called, polls for changes and calls the registered
  callbacks. Failed changes raise `VolumeError`.
- **Battery** (`hyprline.battery`) — `SystemBatteryService.update` turns a
  mapping of UPower device properties (`Percentage`, `State`, `TimeToEmpty`,
  `TimeToFull`) into a cached `BatteryInfo`.
- **Notifications** (`hyprline.notification_server`,
  `hyprline.notification_repository`) — `NotificationDaemon` implements the
  desktop notification calls (`notify`, `close_notification`,
  `get_capabilities`, `get_server_information`) and hands each notification
  to an optional callback; `NotificationRepository` keeps the newest 100 in an
  SQLite file, by default under `$XDG_DATA_HOME/hyprline`.
- **System tray** (`hyprline.status_notifier_watcher`, `hyprline.tray`) —
  `StatusNotifierWatcher` keeps the registry of tray items and drops the items
  of a bus name that vanishes; `build_tray_item`, `parse_menu_layout` and
  `TrayRegistry` turn item properties and menu layouts into `TrayItem` and
  `MenuItem` values.
- **Bar layout** (`hyprline.bar_config`, `hyprline.config`) — `BarConfig`
  places each widget in a zone and an order, with a built-in default and
  `widgets_in_zone` for reading it back; `parse_workspace_bindings` reads the
  workspace key bindings from `hyprland.conf`.
- **Interfaces** (`hyprline.services`) — abstract base classes for each kind
  of service, and the data types in `hyprline.models`.

## Examples

Workspaces on the current Hyprland session:

```python
from hyprline.hyprland_ipc import HyprlandIpc

ipc = HyprlandIpc()
for workspace in ipc.get_workspaces():
    print(workspace.id, workspace.monitor, workspace.windows)
print("active:", ipc.get_active_workspace())
```

Formatting the clock:

```python
from hyprline.datetime_format import SystemDateTimeService
from hyprline.models import DateTimeConfig, DateTimeFormat

clock = SystemDateTimeService()
print(clock.format_current(DateTimeConfig()))
print(clock.format_current(DateTimeConfig(format=DateTimeFormat.CUSTOM, pattern="%H:%M")))
```

Keeping a notification history:

```python
from pathlib import Path
from hyprline.notification_repository import NotificationRepository
from hyprline.notification_server import NotificationDaemon

repository = NotificationRepository(Path("notifications.db"))
daemon = NotificationDaemon(repository, print)
daemon.notify("demo", 0, "", "Hello", "A first message", [], {}, -1)
for notification in daemon.get_history():
    print(notification.id, notification.summary)
```

Reading the bar layout:

```python
from hyprline.bar_config import WidgetZone, load_bar_config

config = load_bar_config()
print(config.widgets_in_zone(WidgetZone.RIGHT))
```

Workspace key bindings from the Hyprland configuration:

```python
from hyprline.config import parse_workspace_bindings

print(parse_workspace_bindings())
```

## What it does not do

- It draws no bar and has no command to run; a front end calls its classes.
- It opens no D-Bus connection. `NotificationDaemon` and
  `StatusNotifierWatcher` handle the calls and keep the state, but do not
  claim a bus name; the battery, tray and menu helpers work on properties
  that the caller fetches; activating tray items and menu entries is left to
  the caller.
- Brightness control and network status exist only as the interface
  `BrightnessService` and the data types `NetworkConnection` and
  `WiFiNetwork`; no implementation is included.
- `load_bar_config` always returns the built-in layout; no configuration file
  is read for it.

## Requirements

Python 3.10 or later on Linux, with no third-party dependencies. Live data
needs a running Hyprland session; volume control needs `wpctl`, and the
keyboard layout needs `hyprctl`.