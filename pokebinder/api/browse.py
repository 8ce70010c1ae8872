"""
Catalog browse endpoints.

The catalog filters, sorts and pages server-side. Catalog failures are
reported in the response's `error` field with an empty page, never as an
HTTP error, so the client can keep rendering its controls.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from pokebinder.api.dependencies import get_catalog, get_store
from pokebinder.api.schemas import CardPageResponse, SetResponse, SortOptionResponse
from pokebinder.config import DEFAULT_BROWSE_SORT
from pokebinder.models.query import ALL_SETS, BROWSE_SORT_OPTIONS, QueryState
from pokebinder.services.card_views import RemoteCardView, load_available_sets
from pokebinder.services.catalog import CatalogClient
from pokebinder.services.collection_store import CollectionStore

router = APIRouter(tags=["browse"])


class SetDirectoryResponse(BaseModel):
    sets: list[SetResponse] = Field(default_factory=list)
    error: str | None = Field(
        default=None,
        description="Set when the directory could not be loaded; the set filter degrades to 'all'",
    )


@router.get("/browse", response_model=CardPageResponse)
async def browse_cards(
    catalog: Annotated[CatalogClient, Depends(get_catalog)],
    store: Annotated[CollectionStore, Depends(get_store)],
    q: Annotated[str, Query(description="Name search term")] = "",
    set_filter: Annotated[str, Query(alias="set", description="Set ID or 'all'")] = ALL_SETS,
    sort: Annotated[str, Query(description="Catalog sort key")] = DEFAULT_BROWSE_SORT,
    page: Annotated[int, Query(ge=1)] = 1,
) -> CardPageResponse:
    """Browse the catalog with the owned/double/wishlist flags filled in."""
    view = RemoteCardView(
        catalog,
        QueryState(page=page, search=q, set_filter=set_filter or ALL_SETS, sort=sort),
    )
    await view.load()
    return CardPageResponse.from_view(
        view, view.items, view.total_count, store, error=view.error
    )


@router.get("/browse/sort-options", response_model=list[SortOptionResponse])
async def browse_sort_options() -> list[SortOptionResponse]:
    return [SortOptionResponse.from_option(option) for option in BROWSE_SORT_OPTIONS]


@router.get("/sets", response_model=SetDirectoryResponse)
async def list_sets(
    catalog: Annotated[CatalogClient, Depends(get_catalog)],
) -> SetDirectoryResponse:
    """Full set directory for the set filter."""
    directory = await load_available_sets(catalog)
    return SetDirectoryResponse(
        sets=[SetResponse.from_set(card_set) for card_set in directory.sets],
        error=directory.error,
    )
