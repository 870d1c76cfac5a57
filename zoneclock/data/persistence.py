"""Durable storage of the tracked locations and the selected hour."""
from __future__ import annotations

import logging
from typing import Iterable

from pydantic import ValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from zoneclock.config.settings import get_settings
from zoneclock.core.models import HourReference, Location
from zoneclock.data import repositories
from zoneclock.data.database import build_session_factory, get_engine, init_db, session_scope
from zoneclock.data.schemas import PersistedSelection, PersistedState, PersistedZone

logger = logging.getLogger("zoneclock.persistence")


class PersistenceGateway:
    """Reads and writes the clock snapshot under a single versioned key.

    Only the source id and local hour of a selection are written. The anchor
    instant is always recomputed against the current time when restoring.
    Storage and decoding errors are logged and reported as a failed save or a
    missing snapshot; they never propagate.
    """

    def __init__(self, engine: Engine | None = None, *, key: str | None = None) -> None:
        self._engine = engine or get_engine()
        self._session_factory = build_session_factory(self._engine)
        self.key = key or get_settings().state_key

    def ensure_schema(self) -> None:
        try:
            init_db(self._engine)
        except SQLAlchemyError:
            logger.exception("Failed to initialise the state table")

    def save(self, locations: Iterable[Location], reference: HourReference | None) -> bool:
        try:
            state = PersistedState(
                zones=[PersistedZone.from_location(location) for location in locations],
                selected=(
                    PersistedSelection(source_zone_id=reference.source_id, local_hour=reference.local_hour)
                    if reference is not None
                    else None
                ),
            )
            payload = state.model_dump_json(by_alias=True)
            with session_scope(self._session_factory) as session:
                repositories.put_state_value(session, self.key, payload)
        except (SQLAlchemyError, ValidationError, ValueError) as exc:
            logger.warning("State not persisted: %s", exc)
            return False
        logger.debug("Persisted %d zones", len(state.zones))
        return True

    def load(self) -> PersistedState | None:
        """Return the stored snapshot, or ``None`` if it is missing, malformed or empty."""
        try:
            with session_scope(self._session_factory) as session:
                payload = repositories.get_state_value(session, self.key)
        except SQLAlchemyError as exc:
            logger.warning("Could not read stored state: %s", exc)
            return None
        if payload is None:
            return None
        try:
            state = PersistedState.model_validate_json(payload)
        except ValidationError as exc:
            logger.warning("Ignoring malformed stored state: %s", exc.errors()[:3])
            return None
        if not state.zones:
            return None
        return state
