"""Clock text formatting driven by the locale in the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import datetime

from hyprline.models import DateTimeConfig, DateTimeFormat
from hyprline.services import DateTimeService

_TWELVE_HOUR_LOCALES = ("en_US", "en_CA", "en_PH", "fil_PH")


def uses_12h_format(env: Mapping[str, str] | None = None) -> bool:
    """Report whether the locale (``LC_TIME``, else ``LANG``) uses a 12-hour clock."""
    env = os.environ if env is None else env
    locale = env.get("LC_TIME")
    if locale is None:
        locale = env.get("LANG", "")
    return locale.startswith(_TWELVE_HOUR_LOCALES)


def _clock(dt: datetime, seconds: bool, twelve_hour: bool) -> str:
    if twelve_hour:
        base = dt.strftime("%I:%M:%S" if seconds else "%I:%M")
        meridiem = "AM" if dt.hour < 12 else "PM"
        return f"{base} {meridiem}"
    return dt.strftime("%H:%M:%S" if seconds else "%H:%M")


class SystemDateTimeService(DateTimeService):
    """Formats the clock according to a :class:`DateTimeConfig`."""

    def format_current(self, config: DateTimeConfig) -> str:
        """Format the current local time."""
        return self.format_datetime(datetime.now().astimezone(), config)

    def format_datetime(self, dt: datetime, config: DateTimeConfig) -> str:
        """Format ``dt`` as ``config`` asks."""
        if config.format is DateTimeFormat.SYSTEM_LOCALE:
            time_text = _clock(dt, config.show_seconds, uses_12h_format())
            if config.show_date:
                return f"{dt.strftime('%m/%d/%y')} {time_text}"
            return time_text
        if config.format is DateTimeFormat.CUSTOM:
            return dt.strftime(config.pattern or "")
        if config.format is DateTimeFormat.TIME_ONLY:
            return _clock(dt, config.show_seconds, twelve_hour=False)
        return dt.strftime("%Y-%m-%d")

    def estimated_width(self, config: DateTimeConfig) -> str:
        """Return the text of the widest time of day, for reserving space."""
        sample = datetime.now().astimezone().replace(hour=23, minute=59, second=59)
        if config.format is DateTimeFormat.SYSTEM_LOCALE and uses_12h_format():
            sample = sample.replace(hour=12)
        return self.format_datetime(sample, config)