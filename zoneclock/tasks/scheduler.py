"""APScheduler wrapper for the clock tick."""
from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from zoneclock.config.settings import get_settings
from zoneclock.core.store import ClockStore

logger = logging.getLogger("zoneclock.scheduler")

TICK_JOB_ID = "clock-tick"


class TickScheduler:
    """Runs ``store.tick`` on the event loop that owns the store."""

    def __init__(self, store: ClockStore, *, interval_seconds: int | None = None) -> None:
        self.store = store
        self.interval_seconds = interval_seconds or get_settings().tick_seconds
        self.scheduler = AsyncIOScheduler(timezone="UTC")
        self._started = False

    async def start(self) -> None:
        if not self._started:
            self.scheduler.add_job(
                self._tick,
                trigger=IntervalTrigger(seconds=self.interval_seconds),
                id=TICK_JOB_ID,
                replace_existing=True,
                max_instances=1,
                coalesce=True,
            )
            self.scheduler.start()
            self._started = True
            logger.info("Clock tick started every %ss", self.interval_seconds)

    async def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            self._started = False
            logger.info("Clock tick stopped")

    async def _tick(self) -> None:
        try:
            self.store.tick()
        except Exception:
            logger.exception("Clock tick failed")
