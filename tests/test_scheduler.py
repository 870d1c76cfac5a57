import asyncio
from datetime import datetime, timedelta, timezone

from zoneclock.core.models import StoreEvent
from zoneclock.core.store import ClockStore
from zoneclock.tasks.scheduler import TICK_JOB_ID, TickScheduler

SUMMER_NOON = datetime(2026, 7, 15, 12, 0, tzinfo=timezone.utc)


class SteppingClock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now


def test_tick_job_registers_and_stops():
    store = ClockStore(clock=lambda: SUMMER_NOON, uses_24_hour_clock=True)
    ticker = TickScheduler(store, interval_seconds=30)

    async def _run():
        await ticker.start()
        job = ticker.scheduler.get_job(TICK_JOB_ID)
        running = ticker.scheduler.running
        await ticker.shutdown()
        return job, running

    job, running = asyncio.run(_run())
    assert job is not None
    assert running


def test_tick_advances_now_only():
    clock = SteppingClock(SUMMER_NOON)
    store = ClockStore(clock=clock, uses_24_hour_clock=True)
    store.add_zone("Europe/Warsaw", "Warsaw")
    store.reset_to_current_hour()
    reference = store.selected_reference
    events = []
    store.subscribe(events.append)

    clock.now = SUMMER_NOON + timedelta(hours=1, minutes=5)
    asyncio.run(TickScheduler(store, interval_seconds=1)._tick())

    assert store.now == clock.now
    assert store.current_minute(store.zones[0]) == 5
    assert store.selected_reference == reference
    assert events == [StoreEvent.NOW]


def test_tick_failure_is_not_raised():
    class BrokenStore:
        def tick(self):
            raise RuntimeError("boom")

    asyncio.run(TickScheduler(BrokenStore(), interval_seconds=1)._tick())
