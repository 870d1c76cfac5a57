"""City search against the autocomplete endpoint, with host fallback."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence
from urllib.parse import urlsplit

import httpx
from pydantic import ValidationError

from zoneclock.config.settings import get_settings
from zoneclock.config.timezones import non_empty
from zoneclock.ingest.schemas import AutocompleteResponse, AutocompleteResult
from zoneclock.utils.time_utils import is_recognized_zone

logger = logging.getLogger("zoneclock.ingest.search")

MIN_QUERY_LENGTH = 2

STATUS_TOO_SHORT = "Type at least 2 characters"
STATUS_NO_MATCHES = "No city matches"
STATUS_UNAVAILABLE = "Search unavailable"


class SearchUnavailableError(RuntimeError):
    """Raised when every search host failed."""

    def __init__(self, attempts: Sequence[str]) -> None:
        super().__init__(" | ".join(attempts) or "No search hosts configured")
        self.attempts = list(attempts)


@dataclass(frozen=True)
class CitySearchResult:
    id: str
    title: str
    subtitle: str
    time_zone: str


@dataclass
class SearchOutcome:
    results: list[CitySearchResult] = field(default_factory=list)
    status: str = ""
    source_host: str | None = None


class CitySearchClient:
    """Query the autocomplete endpoint on each configured host until one answers."""

    def __init__(
        self,
        *,
        hosts: Sequence[str] | None = None,
        limit: int | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self.hosts = [host.rstrip("/") for host in (hosts or settings.search_hosts)]
        self.path = settings.search_path
        self.limit = limit or settings.search_limit
        self._client = httpx.AsyncClient(
            timeout=timeout or settings.lookup_timeout,
            follow_redirects=True,
            headers={"Accept": "application/json", "User-Agent": "ZoneClock/1.0"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch(self, query: str) -> tuple[list[CitySearchResult], str]:
        """Return normalised results and the host that produced them.

        Raises :class:`SearchUnavailableError` once every host has failed.
        """
        attempts: list[str] = []
        params = {"text": query, "limit": str(self.limit)}
        for base in self.hosts:
            try:
                response = await self._client.get(f"{base}{self.path}", params=params)
                response.raise_for_status()
                decoded = AutocompleteResponse.model_validate(response.json())
            except httpx.HTTPStatusError as exc:
                attempts.append(f"{base}: HTTP {exc.response.status_code}")
                logger.warning("City search on %s returned %s", base, exc.response.status_code)
                continue
            except httpx.HTTPError as exc:
                attempts.append(f"{base}: {exc.__class__.__name__}")
                logger.warning("City search on %s failed: %s", base, exc)
                continue
            except (ValidationError, ValueError) as exc:
                attempts.append(f"{base}: invalid response")
                logger.warning("City search on %s returned an unusable body: %s", base, exc)
                continue
            return normalise_results(decoded.results or []), urlsplit(base).hostname or base
        raise SearchUnavailableError(attempts)

    async def search(self, raw_query: str) -> SearchOutcome:
        """Search and describe the outcome; never raises for lookup failures."""
        query = (raw_query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return SearchOutcome(status=STATUS_TOO_SHORT)
        try:
            results, host = await self.fetch(query)
        except SearchUnavailableError as exc:
            logger.warning("City search unavailable: %s", exc)
            return SearchOutcome(status=STATUS_UNAVAILABLE)
        return SearchOutcome(results=results, status="" if results else STATUS_NO_MATCHES, source_host=host)


def _first(*values: str | None) -> str | None:
    for value in values:
        if value:
            return value
    return None


def build_subtitle(item: AutocompleteResult) -> str:
    country_code = item.country_code.upper() if item.country_code else None
    country = _first(item.country, country_code) or ""
    region = _first(item.state_code, item.state, item.county, item.region, item.state_district) or ""
    if country and region:
        return f"{country}, {region}"
    return country or region or (item.formatted or "")


def normalise_results(raw_results: Iterable[AutocompleteResult]) -> list[CitySearchResult]:
    """Keep results with a city-like name and a recognised zone, dropping duplicates."""
    normalised: list[CitySearchResult] = []
    seen: set[str] = set()
    for item in raw_results:
        zone_id = item.time_zone_id()
        if not zone_id or not is_recognized_zone(zone_id):
            continue
        title = non_empty(
            _first(item.city, item.town, item.village, item.hamlet, item.suburb, item.name, item.address_line1)
        )
        if not title:
            continue
        subtitle = build_subtitle(item)
        key = f"{title}|{subtitle}|{zone_id}"
        if key in seen:
            continue
        seen.add(key)
        normalised.append(CitySearchResult(id=key, title=title, subtitle=subtitle, time_zone=zone_id))
    return normalised


async def search_cities(query: str, **kwargs) -> SearchOutcome:
    """Convenience helper for one-off uses."""
    client = CitySearchClient(**kwargs)
    try:
        return await client.search(query)
    finally:
        await client.close()
