"""Ordered collection of tracked locations."""
from __future__ import annotations

import logging
import uuid
from typing import Iterable, Iterator

from zoneclock.core.models import Location
from zoneclock.utils.time_utils import is_recognized_zone

logger = logging.getLogger("zoneclock.registry")


def _normalise(zone_id: str, title: str, subtitle: str) -> tuple[str, str] | None:
    if not is_recognized_zone(zone_id):
        logger.debug("Rejected unrecognised time zone %r", zone_id)
        return None
    normalised_title = (title or "").strip()
    if not normalised_title:
        logger.debug("Rejected empty title for %s", zone_id)
        return None
    return normalised_title, (subtitle or "").strip()


class ZoneRegistry:
    """Tracked locations in display order.

    Mutators validate their input and report success as a boolean; they never
    raise for bad input.
    """

    def __init__(self, locations: Iterable[Location] = ()) -> None:
        self._locations: list[Location] = list(locations)

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self) -> Iterator[Location]:
        return iter(list(self._locations))

    def __bool__(self) -> bool:
        return bool(self._locations)

    @property
    def locations(self) -> tuple[Location, ...]:
        return tuple(self._locations)

    @property
    def first(self) -> Location | None:
        return self._locations[0] if self._locations else None

    @property
    def last(self) -> Location | None:
        return self._locations[-1] if self._locations else None

    def at(self, index: int) -> Location:
        return self._locations[index]

    def index_of(self, location_id: uuid.UUID) -> int | None:
        for index, location in enumerate(self._locations):
            if location.id == location_id:
                return index
        return None

    def get(self, location_id: uuid.UUID) -> Location | None:
        index = self.index_of(location_id)
        return None if index is None else self._locations[index]

    def load(self, locations: Iterable[Location]) -> None:
        """Replace the whole collection, e.g. from a restored snapshot."""
        self._locations = list(locations)

    def add(self, zone_id: str, title: str, subtitle: str = "") -> Location | None:
        normalised = _normalise(zone_id, title, subtitle)
        if normalised is None:
            return None
        location = Location(time_zone=zone_id, title=normalised[0], subtitle=normalised[1])
        self._locations.append(location)
        return location

    def replace(self, location_id: uuid.UUID, zone_id: str, title: str, subtitle: str = "") -> Location | None:
        """Overwrite zone and labels in place; id and position are preserved."""
        index = self.index_of(location_id)
        if index is None:
            logger.debug("Cannot replace unknown location %s", location_id)
            return None
        normalised = _normalise(zone_id, title, subtitle)
        if normalised is None:
            return None
        updated = Location(time_zone=zone_id, title=normalised[0], subtitle=normalised[1], id=location_id)
        self._locations[index] = updated
        return updated

    def remove(self, location_id: uuid.UUID) -> int | None:
        """Remove a location and return the index it occupied, or ``None`` if unknown."""
        index = self.index_of(location_id)
        if index is None:
            return None
        del self._locations[index]
        return index

    def move_to(self, location_id: uuid.UUID, insertion_index: int) -> bool:
        """Move a location to an insertion point; returns whether the order changed.

        The entry is taken out first and ``insertion_index`` is clamped to the
        remaining list. A target past the original position is shifted one slot
        left to account for the removed entry.
        """
        from_index = self.index_of(location_id)
        if from_index is None:
            return False

        reordered = list(self._locations)
        moved = reordered.pop(from_index)
        target = max(0, min(insertion_index, len(reordered)))
        if insertion_index > from_index:
            target = max(0, target - 1)
        reordered.insert(target, moved)

        if [item.id for item in reordered] == [item.id for item in self._locations]:
            return False
        self._locations = reordered
        return True
