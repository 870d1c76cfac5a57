"""City search and share-link routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from zoneclock.core.share import share_link
from zoneclock.core.store import ClockStore
from zoneclock.ingest.search import CitySearchClient

from . import deps, schemas

router = APIRouter(prefix="/api", tags=["search"])


@router.get("/search", response_model=schemas.SearchResponse)
async def search_cities(
    text: str = Query(default="", max_length=120),
    client: CitySearchClient = Depends(deps.get_search_client),
):
    outcome = await client.search(text)
    return schemas.SearchResponse(
        results=[schemas.SearchResultResponse.model_validate(result) for result in outcome.results],
        status=outcome.status,
        source_host=outcome.source_host,
    )


@router.get("/share", response_model=schemas.ShareResponse)
def get_share_link(store: ClockStore = Depends(deps.get_store)):
    return schemas.ShareResponse(url=share_link(store.zones, store.selected_reference))
