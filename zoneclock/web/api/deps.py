"""FastAPI dependencies used across routers."""
from __future__ import annotations

from typing import AsyncGenerator

from fastapi import HTTPException, Request, status

from zoneclock.core.store import ClockStore
from zoneclock.ingest.search import CitySearchClient


def get_store(request: Request) -> ClockStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Clock store not ready")
    return store


async def get_search_client() -> AsyncGenerator[CitySearchClient, None]:
    client = CitySearchClient()
    try:
        yield client
    finally:
        await client.close()
