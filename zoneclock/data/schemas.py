"""Pydantic models for the persisted clock snapshot."""
from __future__ import annotations

import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from zoneclock.core.models import Location


class PersistedZone(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    time_zone: str = Field(alias="timeZone")
    title: str
    subtitle: str = ""

    @classmethod
    def from_location(cls, location: Location) -> "PersistedZone":
        return cls(id=location.id, time_zone=location.time_zone, title=location.title, subtitle=location.subtitle)

    def to_location(self) -> Location:
        return Location(time_zone=self.time_zone, title=self.title, subtitle=self.subtitle, id=self.id)


class PersistedSelection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source_zone_id: uuid.UUID = Field(alias="sourceZoneID")
    local_hour: int = Field(alias="localHour", ge=0, le=23)


class PersistedState(BaseModel):
    zones: List[PersistedZone] = Field(default_factory=list)
    selected: Optional[PersistedSelection] = None
