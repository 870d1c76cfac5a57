"""Data access helpers for the key/value state table."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from zoneclock.data import models


def get_state_value(session: Session, key: str) -> str | None:
    entry = session.scalar(select(models.StateEntry).where(models.StateEntry.key == key))
    return entry.value if entry else None


def put_state_value(session: Session, key: str, value: str) -> None:
    entry = session.get(models.StateEntry, key)
    if entry is None:
        session.add(models.StateEntry(key=key, value=value))
    else:
        entry.value = value
    session.flush()

