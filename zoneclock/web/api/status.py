"""Health and status endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from zoneclock.core.store import ClockStore

from . import deps

router = APIRouter(tags=["status"])


@router.get("/health")
def healthcheck(store: ClockStore = Depends(deps.get_store)) -> dict:
    reference = store.selected_reference
    return {
        "status": "ok",
        "now": store.now.isoformat(),
        "zones": len(store.zones),
        "has_selection": reference is not None,
        "menu_bar_label": store.menu_bar_label,
    }
