"""
List views over cards.

A view owns one QueryState and the page of cards it produced. Two kinds:

- RemoteCardView: the catalog does the filtering and paging. Each load gets a
  generation number; a response whose generation is no longer the latest is
  discarded so a slow, superseded request never overwrites fresher state.
- LocalCardView: the cards are already resident (the user's own lists) and
  are processed with `process_cards` on demand.

Changing the search, set filter or sort resets the page to 1. Views also
convert their QueryState to and from addressable parameters so a view can be
restored from a URL query string.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from pokebinder.config import (
    API_PAGE_SIZE,
    CLIENT_SIDE_PAGE_SIZE,
    DEFAULT_BROWSE_SORT,
    DEFAULT_LOCAL_SORT,
    DEFAULT_SIBLING_COUNT,
)
from pokebinder.models.card import Card, CardSet
from pokebinder.models.query import ALL_SETS, CardPage, QueryState
from pokebinder.services.card_query import ProcessedCards, process_cards
from pokebinder.services.catalog import CatalogError, build_query_expression
from pokebinder.services.pagination import PageItem, compute_range, total_pages

logger = logging.getLogger(__name__)


class CardGateway(Protocol):
    async def fetch_page(
        self, page: int = 1, query: str | None = None, order_by: str | None = None
    ) -> CardPage: ...


class SetGateway(Protocol):
    async def fetch_sets(self) -> list[CardSet]: ...


# =============================================================================
# ADDRESSABLE PARAMETERS
# =============================================================================


def query_to_params(query: QueryState, default_sort: str) -> dict[str, str]:
    """
    Encode a QueryState as URL parameters.

    Defaults are omitted to keep URLs short: empty search, the "all" set,
    the view's default sort and page 1.
    """
    params: dict[str, str] = {}
    if query.search:
        params["q"] = query.search
    if query.set_filter and query.set_filter != ALL_SETS:
        params["set"] = query.set_filter
    if query.sort and query.sort != default_sort:
        params["sort"] = query.sort
    if query.page != 1:
        params["page"] = str(query.page)
    return params


def query_from_params(params: Mapping[str, str], default_sort: str) -> QueryState:
    """Decode URL parameters into a QueryState. Bad page numbers become 1."""
    try:
        page = int(params.get("page", "1"))
    except ValueError:
        page = 1

    return QueryState(
        page=max(page, 1),
        search=params.get("q", ""),
        set_filter=params.get("set") or ALL_SETS,
        sort=params.get("sort") or default_sort,
    )


# =============================================================================
# VIEWS
# =============================================================================


class CardListView(ABC):
    """Shared paging helpers. Subclasses provide `total_count` and `page_size`."""

    query: QueryState
    page_size: int
    default_sort: str

    @property
    @abstractmethod
    def total_count(self) -> int: ...

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_count, self.page_size)

    def page_range(self, sibling_count: int = DEFAULT_SIBLING_COUNT) -> list[PageItem]:
        return compute_range(self.query.page, self.total_count, self.page_size, sibling_count)

    def has_next_page(self) -> bool:
        return self.query.page < self.total_pages

    def has_previous_page(self) -> bool:
        return self.query.page > 1

    def to_params(self) -> dict[str, str]:
        return query_to_params(self.query, self.default_sort)


class RemoteCardView(CardListView):
    """
    Catalog-backed list view.

    Usage:
        view = RemoteCardView(catalog)
        await view.load()
        await view.set_search("pika")   # resets to page 1 and reloads
    """

    default_sort = DEFAULT_BROWSE_SORT

    def __init__(self, gateway: CardGateway, query: QueryState | None = None) -> None:
        self._gateway = gateway
        self.query = query or QueryState(sort=self.default_sort)
        self.items: list[Card] = []
        self._total_count = 0
        self.page_size = API_PAGE_SIZE
        self.error: str | None = None
        self.is_loading = False
        self._generation = 0

    @property
    def total_count(self) -> int:
        return self._total_count

    @property
    def generation(self) -> int:
        """Number of loads issued so far; the latest one owns the view state."""
        return self._generation

    def abandon(self) -> None:
        """Stop caring about any in-flight load (e.g. the view was closed)."""
        self._generation += 1
        self.is_loading = False

    async def load(self) -> bool:
        """
        Fetch the page for the current QueryState.

        A catalog failure empties the view and records the message in
        `error`; it is never raised.

        Returns:
            True if this load's result was applied, False if a newer load
            superseded it while it was in flight
        """
        self._generation += 1
        generation = self._generation
        query = self.query

        self.is_loading = True
        self.error = None

        expression = build_query_expression(query.search, query.set_filter)
        try:
            result = await self._gateway.fetch_page(query.page, expression, query.sort or None)
        except CatalogError as e:
            if generation != self._generation:
                logger.debug("Discarding stale failure for %s", query)
                return False
            logger.warning("Failed to load cards for %s: %s", query, e)
            self.items = []
            self._total_count = 0
            self.error = str(e) or "Unknown error fetching cards"
            self.is_loading = False
            return True

        if generation != self._generation:
            logger.debug("Discarding stale response for %s", query)
            return False

        self.items = result.items
        self._total_count = result.total_count
        self.page_size = result.page_size or API_PAGE_SIZE
        self.is_loading = False
        return True

    async def set_page(self, page: int) -> bool:
        self.query = self.query.with_page(page)
        return await self.load()

    async def set_search(self, search: str) -> bool:
        """Commit a (debounced) search term. Unchanged terms do not reload."""
        if search == self.query.search:
            return False
        self.query = self.query.with_search(search)
        return await self.load()

    async def set_set_filter(self, set_filter: str) -> bool:
        self.query = self.query.with_set_filter(set_filter)
        return await self.load()

    async def set_sort(self, sort: str) -> bool:
        self.query = self.query.with_sort(sort)
        return await self.load()


class LocalCardView(CardListView):
    """
    List view over a resident card list.

    `source` is called on every read, so the view always reflects the latest
    contents (e.g. `store.owned_cards`).
    """

    default_sort = DEFAULT_LOCAL_SORT

    def __init__(
        self,
        source: Callable[[], Iterable[Card]],
        query: QueryState | None = None,
        page_size: int = CLIENT_SIDE_PAGE_SIZE,
    ) -> None:
        self._source = source
        self.query = query or QueryState(sort=self.default_sort)
        self.page_size = page_size

    def result(self) -> ProcessedCards:
        return process_cards(
            self._source(),
            self.query.search,
            self.query.set_filter,
            self.query.sort,
            self.query.page,
            self.page_size,
        )

    @property
    def items(self) -> list[Card]:
        return self.result().page_items

    @property
    def total_count(self) -> int:
        return self.result().total_match_count

    def available_sets(self) -> list[CardSet]:
        """Distinct sets among the resident cards, newest first."""
        sets: dict[str, CardSet] = {}
        for card in self._source():
            if card.card_set is not None:
                sets.setdefault(card.card_set.id, card.card_set)
        return sorted(sets.values(), key=lambda s: (-s.release_timestamp, s.name))

    def set_page(self, page: int) -> None:
        self.query = self.query.with_page(page)

    def set_search(self, search: str) -> None:
        if search != self.query.search:
            self.query = self.query.with_search(search)

    def set_set_filter(self, set_filter: str) -> None:
        self.query = self.query.with_set_filter(set_filter)

    def set_sort(self, sort: str) -> None:
        self.query = self.query.with_sort(sort)


# =============================================================================
# SET DIRECTORY
# =============================================================================


@dataclass
class SetDirectory:
    """Set filter choices. `error` is set when the directory could not be loaded."""

    sets: list[CardSet] = field(default_factory=list)
    error: str | None = None


async def load_available_sets(gateway: SetGateway) -> SetDirectory:
    """
    Load the set directory for the set filter.

    Never raises: a failure only degrades the filter choices, it must not
    block card loading.
    """
    try:
        sets = await gateway.fetch_sets()
    except CatalogError as e:
        logger.warning("Failed to load sets: %s", e)
        return SetDirectory(sets=[], error=str(e) or "Unknown error fetching sets")
    return SetDirectory(sets=sets)
