"""
Query state and result shapes shared by remote and local list views.
"""

from dataclasses import dataclass, field, replace

from pokebinder.models.card import Card

# Set filter sentinel meaning "no set filter"
ALL_SETS = "all"

SORT_NAME = "name"
SORT_NAME_DESC = "-name"
SORT_RELEASE_DATE = "releaseDate"
SORT_RELEASE_DATE_DESC = "-releaseDate"
SORT_SET_ORDER = "set.releaseDate,number"


@dataclass(frozen=True, slots=True)
class SortOption:
    """A sort key with its human-readable label."""

    value: str
    label: str


# Sort choices for views over locally held lists
BASE_SORT_OPTIONS: tuple[SortOption, ...] = (
    SortOption(SORT_NAME, "Name (A-Z)"),
    SortOption(SORT_NAME_DESC, "Name (Z-A)"),
    SortOption(SORT_RELEASE_DATE_DESC, "Release Date (Newest)"),
    SortOption(SORT_RELEASE_DATE, "Release Date (Oldest)"),
    SortOption(SORT_SET_ORDER, "Set Order (Approx.)"),
)

# Sort choices for the catalog-backed browse view (the catalog sorts server-side)
BROWSE_SORT_OPTIONS: tuple[SortOption, ...] = (
    SortOption(SORT_NAME, "Name (A-Z)"),
    SortOption(SORT_NAME_DESC, "Name (Z-A)"),
    SortOption(SORT_RELEASE_DATE_DESC, "Release Date (Newest)"),
    SortOption(SORT_RELEASE_DATE, "Release Date (Oldest)"),
    SortOption(SORT_SET_ORDER, "Set Order"),
)


@dataclass(frozen=True, slots=True)
class QueryState:
    """
    The (page, search, set filter, sort) tuple driving one list view.

    Ephemeral: never persisted. Setters return new instances; changing the
    search, set filter or sort resets the page to 1.
    """

    page: int = 1
    search: str = ""
    set_filter: str = ALL_SETS
    sort: str = SORT_NAME

    def with_page(self, page: int) -> "QueryState":
        return replace(self, page=page)

    def with_search(self, search: str) -> "QueryState":
        return replace(self, search=search, page=1)

    def with_set_filter(self, set_filter: str) -> "QueryState":
        return replace(self, set_filter=set_filter or ALL_SETS, page=1)

    def with_sort(self, sort: str) -> "QueryState":
        return replace(self, sort=sort, page=1)


@dataclass(slots=True)
class CardPage:
    """One page of cards plus the totals needed to render a pager."""

    items: list[Card] = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 0
