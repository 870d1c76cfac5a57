"""Selected-hour reference and its projection onto other locations."""
from __future__ import annotations

import logging
from datetime import datetime

from zoneclock.core.models import HourReference, Location
from zoneclock.utils.time_utils import anchor_for, civil_hour

logger = logging.getLogger("zoneclock.selection")


class SelectionEngine:
    """Holds at most one :class:`HourReference`."""

    def __init__(self) -> None:
        self._reference: HourReference | None = None

    @property
    def reference(self) -> HourReference | None:
        return self._reference

    def clear(self) -> None:
        self._reference = None

    def select_hour(self, hour: int, location: Location, now: datetime) -> bool:
        """Pin ``hour`` on today's date in ``location``; no-op if the anchor cannot be built."""
        anchor = anchor_for(location.time_zone, hour, now)
        if anchor is None:
            logger.debug("Ignoring selection of hour %s in %s", hour, location.time_zone)
            return False
        self._reference = HourReference(
            source_id=location.id,
            source_time_zone=location.time_zone,
            local_hour=hour,
            anchor=anchor,
        )
        return True

    def projected_hour(self, location: Location) -> int | None:
        if self._reference is None:
            return None
        return civil_hour(location.time_zone, self._reference.anchor)

    def is_source(self, location: Location) -> bool:
        return self._reference is not None and self._reference.source_id == location.id

    def reanchor(self, location: Location, now: datetime) -> bool:
        """Recompute the anchor after the source location's zone changed.

        The same local hour is re-derived on today's date in the new zone. If
        that fails the previous reference is kept as is.
        """
        reference = self._reference
        if reference is None or reference.source_id != location.id:
            return False
        anchor = anchor_for(location.time_zone, reference.local_hour, now)
        if anchor is None:
            logger.warning("Could not re-anchor hour %s in %s", reference.local_hour, location.time_zone)
            return False
        self._reference = HourReference(
            source_id=location.id,
            source_time_zone=location.time_zone,
            local_hour=reference.local_hour,
            anchor=anchor,
        )
        return True

    def transfer(self, location: Location, now: datetime) -> bool:
        """Make ``location`` the source, pinned at the hour it currently shows.

        The new local hour is the old anchor seen in ``location``'s zone, so
        the highlighted row does not jump when the source goes away.
        """
        reference = self._reference
        if reference is None:
            return False
        hour = civil_hour(location.time_zone, reference.anchor)
        return self.select_hour(hour, location, now)
