"""Domain objects for tracked locations and the selected hour."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class Location:
    """A tracked place. Identity survives ``replace``; everything else may change."""

    time_zone: str
    title: str
    subtitle: str = ""
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass(frozen=True)
class HourReference:
    """The pinned hour.

    ``anchor`` is a UTC instant whose civil time in ``source_time_zone`` is
    ``local_hour:00:00`` on the day the selection was (re)made.
    """

    source_id: uuid.UUID
    source_time_zone: str
    local_hour: int
    anchor: datetime


@dataclass(frozen=True)
class ResolvedLocation:
    """A location produced by a lookup, not yet tracked."""

    time_zone: str
    title: str
    subtitle: str


@dataclass(frozen=True)
class ZoneRow:
    id: uuid.UUID
    time_zone: str
    title: str
    subtitle: str
    current_time: str
    current_hour: int
    current_minute: int
    projected_hour: int | None
    projected_is_day: bool | None
    projected_hour_label: str | None
    is_selection_source: bool


class StoreEvent(str, Enum):
    ZONES = "zones"
    SELECTION = "selection"
    NOW = "now"
