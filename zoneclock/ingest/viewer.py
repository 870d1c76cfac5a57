"""Viewer-context lookup used to upgrade the default location."""
from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from zoneclock.config.settings import get_settings
from zoneclock.config.timezones import fallback_subtitle, fallback_title, non_empty
from zoneclock.core.models import ResolvedLocation
from zoneclock.ingest.schemas import ViewerContext
from zoneclock.utils.time_utils import is_recognized_zone

logger = logging.getLogger("zoneclock.ingest.viewer")


class ViewerContextClient:
    """Fetch the viewer's approximate location from the lookup service."""

    def __init__(self, *, url: str | None = None, timeout: float | None = None) -> None:
        settings = get_settings()
        self.url = url or settings.viewer_context_url
        self._client = httpx.AsyncClient(
            timeout=timeout or settings.lookup_timeout,
            headers={"Accept": "application/json", "User-Agent": "ZoneClock/1.0"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch(self) -> ViewerContext | None:
        """Return the decoded context, or ``None`` on any network, status or decoding failure."""
        try:
            response = await self._client.get(self.url)
            response.raise_for_status()
            return ViewerContext.model_validate(response.json())
        except httpx.HTTPStatusError as exc:
            logger.warning("Viewer lookup returned %s", exc.response.status_code)
        except httpx.HTTPError as exc:
            logger.warning("Viewer lookup failed: %s", exc)
        except (ValidationError, ValueError) as exc:
            logger.warning("Viewer lookup returned an unusable body: %s", exc)
        return None


def build_viewer_location(context: ViewerContext) -> ResolvedLocation | None:
    """Pick a location from the viewer context.

    The geo place wins when its zone is recognised; otherwise the top-level
    zone is used with the city as title and country/region codes as subtitle.
    """
    place = context.geoapify_place
    if place is not None:
        zone_id = non_empty(place.time_zone)
        if zone_id and is_recognized_zone(zone_id):
            return ResolvedLocation(
                time_zone=zone_id,
                title=non_empty(place.title) or fallback_title(zone_id),
                subtitle=non_empty(place.subtitle) or fallback_subtitle(zone_id),
            )

    zone_id = non_empty(context.time_zone)
    if not zone_id or not is_recognized_zone(zone_id):
        return None

    country_code = non_empty(context.country_code)
    region_code = non_empty(context.region_code)
    if country_code and region_code:
        subtitle = f"{country_code.upper()}, {region_code.upper()}"
    elif country_code:
        subtitle = country_code.upper()
    else:
        subtitle = fallback_subtitle(zone_id)

    return ResolvedLocation(
        time_zone=zone_id,
        title=non_empty(context.city) or fallback_title(zone_id),
        subtitle=subtitle,
    )


async def fetch_viewer_location(**kwargs) -> ResolvedLocation | None:
    """Convenience helper for one-off uses."""
    client = ViewerContextClient(**kwargs)
    try:
        context = await client.fetch()
    finally:
        await client.close()
    return build_viewer_location(context) if context is not None else None
