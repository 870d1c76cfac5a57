"""The clock store: tracked locations, the pinned hour and their persistence."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, List

from zoneclock.config.timezones import SEED_LOCATIONS
from zoneclock.core.models import HourReference, Location, ResolvedLocation, StoreEvent, ZoneRow
from zoneclock.core.registry import ZoneRegistry
from zoneclock.core.selection import SelectionEngine
from zoneclock.data.persistence import PersistenceGateway
from zoneclock.utils.formatting import compact_time, detect_uses_24_hour_clock, formatted_hour_label, is_day_hour
from zoneclock.utils.time_utils import civil_hour, civil_minute, get_system_timezone, is_recognized_zone, utc_now

logger = logging.getLogger("zoneclock.store")

Observer = Callable[[StoreEvent], None]


class ClockStore:
    """Single authoritative owner of the registry and the selected hour.

    All methods are synchronous and expected to run on one thread (the event
    loop in the web app). Every successful mutation is persisted and
    announced to subscribers.
    """

    def __init__(
        self,
        persistence: PersistenceGateway | None = None,
        *,
        clock: Callable[[], datetime] = utc_now,
        uses_24_hour_clock: bool | None = None,
    ) -> None:
        self.registry = ZoneRegistry()
        self.selection = SelectionEngine()
        self._persistence = persistence
        self._clock = clock
        self._observers: List[Observer] = []
        self.now = clock()
        self.uses_24_hour_clock = (
            uses_24_hour_clock if uses_24_hour_clock is not None else detect_uses_24_hour_clock()
        )

    # -- observation -----------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, *events: StoreEvent) -> None:
        for event in events:
            for observer in list(self._observers):
                try:
                    observer(event)
                except Exception:
                    logger.exception("Store observer failed on %s", event.value)

    def _commit(self, *events: StoreEvent) -> None:
        self._persist()
        self._notify(*events)

    def _persist(self) -> None:
        if self._persistence is None:
            return
        self._persistence.save(self.registry.locations, self.selection.reference)

    # -- read side -------------------------------------------------------

    @property
    def zones(self) -> tuple[Location, ...]:
        return self.registry.locations

    @property
    def selected_reference(self) -> HourReference | None:
        return self.selection.reference

    def projected_hour(self, location: Location) -> int | None:
        return self.selection.projected_hour(location)

    def current_hour(self, location: Location) -> int:
        return civil_hour(location.time_zone, self.now)

    def current_minute(self, location: Location) -> int:
        return civil_minute(location.time_zone, self.now)

    @property
    def menu_bar_label(self) -> str:
        last = self.registry.last
        zone_id = last.time_zone if last is not None else get_system_timezone()
        return compact_time(zone_id, self.now, uses_24_hour_clock=self.uses_24_hour_clock)

    def rows(self) -> list[ZoneRow]:
        rows: list[ZoneRow] = []
        for location in self.registry:
            projected = self.projected_hour(location)
            rows.append(
                ZoneRow(
                    id=location.id,
                    time_zone=location.time_zone,
                    title=location.title,
                    subtitle=location.subtitle,
                    current_time=compact_time(
                        location.time_zone, self.now, uses_24_hour_clock=self.uses_24_hour_clock
                    ),
                    current_hour=self.current_hour(location),
                    current_minute=self.current_minute(location),
                    projected_hour=projected,
                    projected_is_day=None if projected is None else is_day_hour(projected),
                    projected_hour_label=(
                        None
                        if projected is None
                        else formatted_hour_label(projected, uses_24_hour_clock=self.uses_24_hour_clock)
                    ),
                    is_selection_source=self.selection.is_source(location),
                )
            )
        return rows

    # -- commands --------------------------------------------------------

    def tick(self) -> None:
        """Advance ``now``; never touches the registry or the selection."""
        self.now = self._clock()
        self._notify(StoreEvent.NOW)

    def select_hour(self, hour: int, location: Location) -> bool:
        if self.registry.get(location.id) is None:
            logger.debug("Ignoring selection in untracked location %s", location.id)
            return False
        if not self.selection.select_hour(hour, location, self._clock()):
            return False
        self._commit(StoreEvent.SELECTION)
        return True

    def reset_to_current_hour(self) -> bool:
        """Select the current hour of the first location."""
        first = self.registry.first
        if first is None:
            return False
        return self.select_hour(civil_hour(first.time_zone, self._clock()), first)

    def add_zone(self, time_zone: str, title: str, subtitle: str = "") -> bool:
        location = self.registry.add(time_zone, title, subtitle)
        if location is None:
            return False
        logger.info("Added %s (%s)", location.title, location.time_zone)
        self._commit(StoreEvent.ZONES)
        return True

    def replace_zone(self, location_id: uuid.UUID, time_zone: str, title: str, subtitle: str = "") -> bool:
        location = self.registry.replace(location_id, time_zone, title, subtitle)
        if location is None:
            return False
        events = [StoreEvent.ZONES]
        if self.selection.reanchor(location, self._clock()):
            events.append(StoreEvent.SELECTION)
        logger.info("Replaced %s with %s (%s)", location_id, location.title, location.time_zone)
        self._commit(*events)
        return True

    def remove_zone(self, location_id: uuid.UUID) -> None:
        reference = self.selection.reference
        index = self.registry.remove(location_id)
        if index is None:
            return
        logger.info("Removed location %s", location_id)

        if not self.registry:
            self.selection.clear()
            self._commit(StoreEvent.ZONES, StoreEvent.SELECTION)
            return

        if reference is None or reference.source_id != location_id:
            self._commit(StoreEvent.ZONES)
            return

        fallback = self.registry.at(min(index, len(self.registry) - 1))
        if not self.selection.transfer(fallback, self._clock()):
            self._select_current_hour_in_first()
        self._commit(StoreEvent.ZONES, StoreEvent.SELECTION)

    def move_zone(self, location_id: uuid.UUID, insertion_index: int) -> bool:
        if not self.registry.move_to(location_id, insertion_index):
            return False
        self._commit(StoreEvent.ZONES)
        return True

    def apply_resolved_location(self, resolved: ResolvedLocation) -> bool:
        """Overwrite the first row with a resolved location, keeping its id."""
        first = self.registry.first
        if first is None:
            return False
        return self.replace_zone(first.id, resolved.time_zone, resolved.title, resolved.subtitle)

    # -- lifecycle -------------------------------------------------------

    def restore(self) -> bool:
        """Hydrate from the persisted snapshot; returns whether one was applied."""
        if self._persistence is None:
            return False
        state = self._persistence.load()
        if state is None:
            return False

        locations: list[Location] = []
        seen: set[uuid.UUID] = set()
        for zone in state.zones:
            if zone.id in seen or not is_recognized_zone(zone.time_zone) or not zone.title.strip():
                logger.warning("Dropping unusable stored zone %s (%s)", zone.id, zone.time_zone)
                continue
            seen.add(zone.id)
            locations.append(zone.to_location())
        if not locations:
            return False

        self.registry.load(locations)
        self.selection.clear()
        selected = state.selected
        source = self.registry.get(selected.source_zone_id) if selected is not None else None
        if selected is None or source is None or not self.selection.select_hour(
            selected.local_hour, source, self._clock()
        ):
            self._select_current_hour_in_first()
        logger.info("Restored %d zones", len(locations))
        self._commit(StoreEvent.ZONES, StoreEvent.SELECTION)
        return True

    def seed_defaults(self, system_location: ResolvedLocation | None = None) -> None:
        """Start from the seed locations, with the first replaced by ``system_location``."""
        locations = [Location(time_zone=seed.time_zone, title=seed.title, subtitle=seed.subtitle) for seed in SEED_LOCATIONS]
        if system_location is not None and is_recognized_zone(system_location.time_zone):
            locations[0] = Location(
                time_zone=system_location.time_zone,
                title=system_location.title,
                subtitle=system_location.subtitle,
                id=locations[0].id,
            )
        self.registry.load(locations)
        self.selection.clear()
        self._select_current_hour_in_first()
        self._commit(StoreEvent.ZONES, StoreEvent.SELECTION)

    def _select_current_hour_in_first(self) -> None:
        first = self.registry.first
        if first is None:
            self.selection.clear()
            return
        now = self._clock()
        self.selection.select_hour(civil_hour(first.time_zone, now), first, now)
