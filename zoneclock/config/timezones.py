"""Seed locations, country names and labels derived from zone identifiers."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Iterable

logger = logging.getLogger("zoneclock.timezones")


@dataclass(frozen=True)
class SeedLocation:
    time_zone: str
    title: str
    subtitle: str


# Order matters: the first entry is overwritten by the system default location.
SEED_LOCATIONS: tuple[SeedLocation, ...] = (
    SeedLocation("America/Los_Angeles", "Portland", "United States, OR"),
    SeedLocation("America/Edmonton", "Calgary", "Canada, AB"),
    SeedLocation("America/Chicago", "Houston", "United States, TX"),
    SeedLocation("America/New_York", "Miami", "United States, FL"),
    SeedLocation("Europe/Warsaw", "Warsaw", "Poland"),
)


def fallback_title(zone_id: str) -> str:
    """Return the city part of a zone identifier, e.g. ``New York`` for ``America/New_York``."""
    segments = [segment for segment in zone_id.split("/") if segment]
    if not segments:
        return zone_id
    return segments[-1].replace("_", " ")


def fallback_subtitle(zone_id: str) -> str:
    """Return the region part of a zone identifier joined with `` / ``."""
    segments = [segment for segment in zone_id.split("/") if segment]
    return " / ".join(segments[:-1]).replace("_", " ")


def non_empty(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


SYSTEM_ISO3166 = Path("/usr/share/zoneinfo/iso3166.tab")


def parse_iso3166(lines: Iterable[str]) -> dict[str, str]:
    """Parse ``iso3166.tab`` lines into a code -> country name mapping."""
    names: dict[str, str] = {}
    for line in lines:
        if not line or line.startswith("#"):
            continue
        parts = line.strip().split("\t")
        if len(parts) >= 2:
            names[parts[0].upper()] = parts[1]
    return names


def _read_iso3166() -> str | None:
    try:
        return resources.files("tzdata.zoneinfo").joinpath("iso3166.tab").read_text(encoding="utf-8")
    except (ModuleNotFoundError, OSError):
        pass
    try:
        return SYSTEM_ISO3166.read_text(encoding="utf-8")
    except OSError:
        return None


@lru_cache(maxsize=1)
def country_names() -> dict[str, str]:
    text = _read_iso3166()
    if text is None:
        logger.warning("No iso3166.tab found; country names unavailable")
        return {}
    return parse_iso3166(text.splitlines())


def country_name(code: str | None) -> str | None:
    if not code:
        return None
    return country_names().get(code.strip().upper())
