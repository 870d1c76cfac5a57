"""Clock-face formatting helpers."""
from __future__ import annotations

import locale
from datetime import datetime
from functools import lru_cache

from zoneclock.config.settings import get_settings
from zoneclock.utils.time_utils import to_zone

DAY_HOURS = range(6, 22)


def detect_uses_24_hour_clock() -> bool:
    """Return the configured 12/24-hour preference, falling back to the process locale."""
    configured = get_settings().uses_24_hour_clock
    if configured is not None:
        return configured
    return locale_uses_24_hour_clock()


@lru_cache(maxsize=1)
def locale_uses_24_hour_clock() -> bool:
    """Read the user locale's time format once; ``LC_TIME`` is restored afterwards."""
    nl_langinfo = getattr(locale, "nl_langinfo", None)
    if nl_langinfo is None:
        return True
    try:
        previous = locale.setlocale(locale.LC_TIME)
    except locale.Error:
        return True
    try:
        locale.setlocale(locale.LC_TIME, "")
        time_format = nl_langinfo(locale.T_FMT)
    except (locale.Error, ValueError):
        return True
    finally:
        locale.setlocale(locale.LC_TIME, previous)
    return "%p" not in time_format and "%I" not in time_format and "%r" not in time_format


def short_time(zone_id: str, instant: datetime, *, uses_24_hour_clock: bool) -> str:
    """Return ``HH:MM`` or ``h:MM AM`` for ``instant`` in ``zone_id``."""
    local = to_zone(zone_id, instant)
    if local is None:
        return ""
    if uses_24_hour_clock:
        return f"{local.hour:02d}:{local.minute:02d}"
    hour = local.hour % 12 or 12
    period = "PM" if local.hour >= 12 else "AM"
    return f"{hour}:{local.minute:02d} {period}"


def compact_time(zone_id: str, instant: datetime, *, uses_24_hour_clock: bool) -> str:
    """Like :func:`short_time` without the space before the period, for the menu bar."""
    output = short_time(zone_id, instant, uses_24_hour_clock=uses_24_hour_clock)
    return output if uses_24_hour_clock else output.replace(" ", "")


def formatted_hour_label(hour: int, *, uses_24_hour_clock: bool) -> str:
    if uses_24_hour_clock:
        return f"{hour:02d}"
    period = "PM" if hour >= 12 else "AM"
    display = hour % 12 or 12
    # Single-digit hours get a padding space so the labels line up.
    padding = " " if hour < 10 else ""
    return f"{display}{padding} {period}"


def is_day_hour(hour: int) -> bool:
    return hour in DAY_HOURS
