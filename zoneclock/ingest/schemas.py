"""Response models for the remote location lookups."""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ViewerPlace(_Lenient):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    time_zone: Optional[str] = Field(default=None, alias="timeZone")


class ViewerContext(_Lenient):
    city: Optional[str] = None
    country_code: Optional[str] = Field(default=None, alias="countryCode")
    region_code: Optional[str] = Field(default=None, alias="regionCode")
    time_zone: Optional[str] = Field(default=None, alias="timeZone")
    geoapify_place: Optional[ViewerPlace] = Field(default=None, alias="geoapifyPlace")


class TimeZoneObject(_Lenient):
    id: Optional[str] = None
    name: Optional[str] = None


class AutocompleteResult(_Lenient):
    address_line1: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    county: Optional[str] = None
    formatted: Optional[str] = None
    hamlet: Optional[str] = None
    name: Optional[str] = None
    region: Optional[str] = None
    state: Optional[str] = None
    state_code: Optional[str] = None
    state_district: Optional[str] = None
    suburb: Optional[str] = None
    town: Optional[str] = None
    village: Optional[str] = None
    # A bare identifier or an object; the string form is tried first.
    timezone: Optional[Union[StrictStr, TimeZoneObject]] = Field(default=None, union_mode="left_to_right")

    def time_zone_id(self) -> str | None:
        value = self.timezone
        if value is None:
            return None
        if isinstance(value, str):
            return value
        return value.name or value.id


class AutocompleteResponse(_Lenient):
    results: Optional[List[AutocompleteResult]] = None
