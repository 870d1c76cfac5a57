"""Timezone-aware time utilities.

Every zone computation in the package goes through these helpers; nothing
else derives UTC offsets by hand.

Civil times that do not exist (spring-forward gap) or occur twice (fall-back
overlap) are resolved with ``fold=0``. For an overlap that is the earlier of
the two instants; for a gap it is the transition instant itself, i.e. the
earliest valid instant at or after the requested wall-clock time.
"""
from __future__ import annotations

from datetime import datetime, time, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from zoneclock.config.settings import get_settings


@lru_cache(maxsize=512)
def resolve_zone(zone_id: str) -> ZoneInfo | None:
    """Return the ``ZoneInfo`` for ``zone_id`` or ``None`` if it is not a recognised zone."""
    if not isinstance(zone_id, str) or not zone_id.strip():
        return None
    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None


def is_recognized_zone(zone_id: str | None) -> bool:
    return zone_id is not None and resolve_zone(zone_id) is not None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _to_utc(instant: datetime) -> datetime:
    # Naive datetimes are treated as UTC.
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def to_zone(zone_id: str, instant: datetime) -> datetime | None:
    """Convert an instant to civil time in ``zone_id``."""
    tz = resolve_zone(zone_id)
    if tz is None:
        return None
    return _to_utc(instant).astimezone(tz)


def civil_hour(zone_id: str, instant: datetime) -> int:
    """Hour of day (0-23) of ``instant`` in ``zone_id``; 0 for an unrecognised zone."""
    local = to_zone(zone_id, instant)
    return local.hour if local is not None else 0


def civil_minute(zone_id: str, instant: datetime) -> int:
    """Minute (0-59) of ``instant`` in ``zone_id``; 0 for an unrecognised zone."""
    local = to_zone(zone_id, instant)
    return local.minute if local is not None else 0


def anchor_for(zone_id: str, hour: int, reference: datetime) -> datetime | None:
    """Return the UTC instant at ``hour:00:00`` on the civil date of ``reference`` in ``zone_id``.

    Returns ``None`` if ``zone_id`` is not recognised or ``hour`` is outside 0-23.
    """
    tz = resolve_zone(zone_id)
    if tz is None or not 0 <= hour <= 23:
        return None
    local_date = _to_utc(reference).astimezone(tz).date()
    wall = datetime.combine(local_date, time(hour, 0, 0), tzinfo=tz).replace(fold=0)
    return wall.astimezone(timezone.utc)


def get_system_timezone() -> str:
    """Return the identifier of the local environment's time zone."""
    configured = get_settings().default_timezone
    if is_recognized_zone(configured):
        return configured
    return "UTC"
