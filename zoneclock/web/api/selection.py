"""Routes for the selected hour."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from zoneclock.core.store import ClockStore

from . import deps, schemas

router = APIRouter(prefix="/api/selection", tags=["selection"])


def _serialize_selection(store: ClockStore) -> schemas.SelectionResponse | None:
    reference = store.selected_reference
    if reference is None:
        return None
    return schemas.SelectionResponse(
        source_zone_id=reference.source_id,
        source_time_zone=reference.source_time_zone,
        local_hour=reference.local_hour,
        anchor=reference.anchor,
    )


@router.get("", response_model=Optional[schemas.SelectionResponse])
def get_selection(store: ClockStore = Depends(deps.get_store)):
    return _serialize_selection(store)


@router.post("", response_model=Optional[schemas.SelectionResponse])
def select_hour(payload: schemas.SelectionInput, store: ClockStore = Depends(deps.get_store)):
    location = store.registry.get(payload.zone_id)
    if location is None:
        raise HTTPException(status_code=404, detail="Zone not found")
    if not store.select_hour(payload.hour, location):
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Unable to select hour")
    return _serialize_selection(store)


@router.post("/reset", response_model=Optional[schemas.SelectionResponse])
def reset_selection(store: ClockStore = Depends(deps.get_store)):
    store.reset_to_current_hour()
    return _serialize_selection(store)
