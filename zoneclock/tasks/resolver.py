"""Resolve the first row's location on a first run."""
from __future__ import annotations

import asyncio
import locale
import logging
import os
from typing import Callable

from zoneclock.config.timezones import country_name, fallback_subtitle, fallback_title
from zoneclock.core.models import ResolvedLocation
from zoneclock.core.store import ClockStore
from zoneclock.ingest.viewer import ViewerContextClient, build_viewer_location
from zoneclock.utils.time_utils import get_system_timezone

logger = logging.getLogger("zoneclock.resolver")


def locale_region_code() -> str | None:
    """Return the region part of the process locale, e.g. ``US`` for ``en_US.UTF-8``."""
    try:
        language_code = locale.getlocale()[0]
    except ValueError:
        language_code = None
    candidates = [language_code, os.environ.get("LC_ALL"), os.environ.get("LANG")]
    for candidate in candidates:
        if not candidate:
            continue
        tag = candidate.split(".", 1)[0].split("@", 1)[0].replace("-", "_")
        parts = tag.split("_")
        if len(parts) >= 2 and len(parts[-1]) == 2 and parts[-1].isalpha():
            return parts[-1].upper()
    return None


def system_default_subtitle(zone_id: str, region_code: str | None) -> str:
    """``Country, RC`` from the locale region, else ``RC``, else the zone-identifier fallback."""
    if not region_code:
        return fallback_subtitle(zone_id)
    name = country_name(region_code)
    return f"{name}, {region_code}" if name else region_code


def system_default_location() -> ResolvedLocation:
    zone_id = get_system_timezone()
    return ResolvedLocation(
        time_zone=zone_id,
        title=fallback_title(zone_id),
        subtitle=system_default_subtitle(zone_id, locale_region_code()),
    )


class DefaultLocationResolver:
    """Seeds the store from the local environment and upgrades it from the viewer lookup.

    The upgrade runs as a background task. It is best effort: failures keep
    the seeded location and are only logged.
    """

    def __init__(
        self,
        store: ClockStore,
        *,
        client_factory: Callable[[], ViewerContextClient] = ViewerContextClient,
    ) -> None:
        self.store = store
        self._client_factory = client_factory
        self._task: asyncio.Task | None = None

    def seed(self) -> None:
        location = system_default_location()
        logger.info("Seeding default location %s (%s)", location.title, location.time_zone)
        self.store.seed_defaults(location)

    async def upgrade(self) -> bool:
        client = self._client_factory()
        try:
            context = await client.fetch()
        finally:
            await client.close()
        if context is None:
            return False
        resolved = build_viewer_location(context)
        if resolved is None:
            logger.info("Viewer lookup had no usable time zone")
            return False
        # Applied synchronously after the await so it cannot interleave with other commands.
        applied = self.store.apply_resolved_location(resolved)
        if applied:
            logger.info("Default location upgraded to %s (%s)", resolved.title, resolved.time_zone)
        return applied

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        try:
            await self.upgrade()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Default location upgrade failed")
