"""Routes for managing tracked locations."""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, status

from zoneclock.core.store import ClockStore

from . import deps, schemas

router = APIRouter(prefix="/api/zones", tags=["zones"])


def serialize_zones(store: ClockStore) -> schemas.ZonesResponse:
    return schemas.ZonesResponse(
        zones=[schemas.ZoneRowResponse.model_validate(row) for row in store.rows()],
        menu_bar_label=store.menu_bar_label,
        uses_24_hour_clock=store.uses_24_hour_clock,
    )


@router.get("", response_model=schemas.ZonesResponse)
def list_zones(store: ClockStore = Depends(deps.get_store)):
    return serialize_zones(store)


@router.post("", response_model=schemas.ZonesResponse, status_code=status.HTTP_201_CREATED)
def add_zone(payload: schemas.ZoneInput, store: ClockStore = Depends(deps.get_store)):
    if not store.add_zone(payload.time_zone, payload.title, payload.subtitle):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Unable to add city",
        )
    return serialize_zones(store)


@router.put("/{zone_id}", response_model=schemas.ZonesResponse)
def replace_zone(zone_id: uuid.UUID, payload: schemas.ZoneInput, store: ClockStore = Depends(deps.get_store)):
    if store.registry.get(zone_id) is None:
        raise HTTPException(status_code=404, detail="Zone not found")
    if not store.replace_zone(zone_id, payload.time_zone, payload.title, payload.subtitle):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Unable to update city",
        )
    return serialize_zones(store)


@router.delete("/{zone_id}", response_model=schemas.ZonesResponse)
def remove_zone(zone_id: uuid.UUID, store: ClockStore = Depends(deps.get_store)):
    store.remove_zone(zone_id)
    return serialize_zones(store)


@router.post("/{zone_id}/move", response_model=schemas.ZonesResponse)
def move_zone(zone_id: uuid.UUID, payload: schemas.MoveInput, store: ClockStore = Depends(deps.get_store)):
    if store.registry.get(zone_id) is None:
        raise HTTPException(status_code=404, detail="Zone not found")
    store.move_zone(zone_id, payload.insertion_index)
    return serialize_zones(store)
