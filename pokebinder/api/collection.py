"""
Collection API endpoints.

Views and mutations over the owned, double and wishlist lists. The lists are
held locally, so search, set filter, sort and paging run in-process.

Adding to a list follows the store's rules: marking a double also owns the
card, owning a card removes it from the wishlist, and wishlisting an owned
card is ignored. Every mutation responds with the card's resulting flags.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from pokebinder.api.dependencies import get_catalog, get_store
from pokebinder.api.schemas import (
    CardPageResponse,
    CardPayload,
    MembershipResponse,
    SortOptionResponse,
)
from pokebinder.config import DEFAULT_LOCAL_SORT
from pokebinder.models.collection import CollectionList
from pokebinder.models.failure import FailureKind, KnownError
from pokebinder.models.query import ALL_SETS, BASE_SORT_OPTIONS, QueryState
from pokebinder.services.card_views import LocalCardView
from pokebinder.services.catalog import CatalogClient, CatalogError
from pokebinder.services.collection_store import CollectionStore

router = APIRouter(tags=["collection"])


def _resolve_list(list_name: str) -> CollectionList:
    try:
        return CollectionList(list_name)
    except ValueError:
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message=f"Unknown collection list '{list_name}'.",
            suggestion="Use one of: " + ", ".join(kind.value for kind in CollectionList),
        ) from None


@router.get("/collection/sort-options", response_model=list[SortOptionResponse])
async def collection_sort_options() -> list[SortOptionResponse]:
    return [SortOptionResponse.from_option(option) for option in BASE_SORT_OPTIONS]


@router.get("/collection/{list_name}", response_model=CardPageResponse)
async def get_collection_list(
    list_name: str,
    store: Annotated[CollectionStore, Depends(get_store)],
    q: Annotated[str, Query(description="Name search term")] = "",
    set_filter: Annotated[str, Query(alias="set", description="Set ID or 'all'")] = ALL_SETS,
    sort: Annotated[str, Query()] = DEFAULT_LOCAL_SORT,
    page: Annotated[int, Query(ge=1)] = 1,
) -> CardPageResponse:
    """One page of the named list, filtered and sorted."""
    kind = _resolve_list(list_name)
    view = LocalCardView(
        lambda: store.cards(kind),
        QueryState(page=page, search=q, set_filter=set_filter or ALL_SETS, sort=sort),
    )
    result = view.result()
    return CardPageResponse.from_view(view, result.page_items, result.total_match_count, store)


@router.put("/collection/{list_name}", response_model=MembershipResponse)
async def add_card_to_list(
    list_name: str,
    payload: CardPayload,
    store: Annotated[CollectionStore, Depends(get_store)],
) -> MembershipResponse:
    """Add a card record to the named list."""
    kind = _resolve_list(list_name)
    try:
        card = payload.to_card()
    except ValueError as e:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="Card record is invalid.",
            detail=str(e),
        ) from e

    store.add(kind, card)
    return MembershipResponse.for_card(card.id, store)


@router.put("/collection/{list_name}/{card_id}", response_model=MembershipResponse)
async def add_catalog_card_to_list(
    list_name: str,
    card_id: str,
    store: Annotated[CollectionStore, Depends(get_store)],
    catalog: Annotated[CatalogClient, Depends(get_catalog)],
) -> MembershipResponse:
    """Fetch a card from the catalog by ID and add it to the named list."""
    kind = _resolve_list(list_name)
    try:
        card = await catalog.fetch_card(card_id)
    except CatalogError as e:
        raise KnownError(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=str(e),
            suggestion="Try again later or add the card with its full record.",
        ) from e

    store.add(kind, card)
    return MembershipResponse.for_card(card.id, store)


@router.delete("/collection/{list_name}/{card_id}", response_model=MembershipResponse)
async def remove_card_from_list(
    list_name: str,
    card_id: str,
    store: Annotated[CollectionStore, Depends(get_store)],
) -> MembershipResponse:
    """Remove a card from the named list. Removing an owned card drops its double."""
    kind = _resolve_list(list_name)
    store.remove(kind, card_id)
    return MembershipResponse.for_card(card_id, store)


@router.get("/cards/{card_id}/membership", response_model=MembershipResponse)
async def get_card_membership(
    card_id: str,
    store: Annotated[CollectionStore, Depends(get_store)],
) -> MembershipResponse:
    return MembershipResponse.for_card(card_id, store)
