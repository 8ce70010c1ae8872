"""
PokeBinder services.

Collection state and the filter -> sort -> paginate pipeline behind every list view.
"""

from pokebinder.services.card_query import (
    SORTERS,
    ProcessedCards,
    filter_by_search,
    filter_by_set,
    process_cards,
    sort_cards,
)
from pokebinder.services.card_views import (
    LocalCardView,
    RemoteCardView,
    SetDirectory,
    load_available_sets,
    query_from_params,
    query_to_params,
)
from pokebinder.services.catalog import CatalogClient, CatalogError, build_query_expression
from pokebinder.services.collection_store import CollectionStore, Membership
from pokebinder.services.debounce import Debouncer
from pokebinder.services.pagination import GAP, compute_range, total_pages

__all__ = [
    # Collection store
    "CollectionStore",
    "Membership",
    # Local query processing
    "SORTERS",
    "ProcessedCards",
    "filter_by_search",
    "filter_by_set",
    "process_cards",
    "sort_cards",
    # Pager
    "GAP",
    "compute_range",
    "total_pages",
    # Catalog gateway
    "CatalogClient",
    "CatalogError",
    "build_query_expression",
    # Views
    "Debouncer",
    "LocalCardView",
    "RemoteCardView",
    "SetDirectory",
    "load_available_sets",
    "query_from_params",
    "query_to_params",
]
