from pokebinder.models.card import Card, CardImages, CardSet, parse_release_date
from pokebinder.models.collection import CardPosition, CollectionList
from pokebinder.models.failure import FailureDetail, FailureKind, KnownError
from pokebinder.models.query import (
    ALL_SETS,
    BASE_SORT_OPTIONS,
    BROWSE_SORT_OPTIONS,
    CardPage,
    QueryState,
    SortOption,
)

__all__ = [
    "ALL_SETS",
    "BASE_SORT_OPTIONS",
    "BROWSE_SORT_OPTIONS",
    "Card",
    "CardImages",
    "CardPage",
    "CardPosition",
    "CardSet",
    "CollectionList",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "QueryState",
    "SortOption",
    "parse_release_date",
]
