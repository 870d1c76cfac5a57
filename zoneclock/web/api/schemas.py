"""Pydantic models shared across API routes."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class ZoneInput(BaseModel):
    time_zone: str = Field(..., max_length=64)
    title: str = Field(..., max_length=120)
    subtitle: str = Field(default="", max_length=200)

    @field_validator("time_zone")
    @classmethod
    def strip_zone(cls, value: str) -> str:
        return value.strip()


class MoveInput(BaseModel):
    insertion_index: int


class SelectionInput(BaseModel):
    zone_id: uuid.UUID
    hour: int = Field(..., ge=0, le=23)


class ZoneRowResponse(BaseModel):
    id: uuid.UUID
    time_zone: str
    title: str
    subtitle: str
    current_time: str
    current_hour: int
    current_minute: int
    projected_hour: Optional[int]
    projected_is_day: Optional[bool]
    projected_hour_label: Optional[str]
    is_selection_source: bool

    class Config:
        from_attributes = True


class ZonesResponse(BaseModel):
    zones: List[ZoneRowResponse]
    menu_bar_label: str
    uses_24_hour_clock: bool


class SelectionResponse(BaseModel):
    source_zone_id: uuid.UUID
    source_time_zone: str
    local_hour: int
    anchor: datetime


class SearchResultResponse(BaseModel):
    id: str
    title: str
    subtitle: str
    time_zone: str

    class Config:
        from_attributes = True


class SearchResponse(BaseModel):
    results: List[SearchResultResponse]
    status: str
    source_host: Optional[str] = None


class ShareResponse(BaseModel):
    url: str
