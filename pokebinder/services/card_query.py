"""
Card query processor.

Search, set filter, sort and page over a list of cards that is already held
in memory (the user's own lists). The catalog-backed browse view does the same
work server-side through the catalog gateway.

Pure functions: inputs are never mutated, so results can simply be recomputed
whenever any input changes.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from pokebinder.models.card import Card
from pokebinder.models.query import (
    ALL_SETS,
    SORT_NAME,
    SORT_NAME_DESC,
    SORT_RELEASE_DATE,
    SORT_RELEASE_DATE_DESC,
    SORT_SET_ORDER,
)

CardSorter = Callable[[Iterable[Card]], list[Card]]


@dataclass
class ProcessedCards:
    """One page of a processed card list."""

    page_items: list[Card] = field(default_factory=list)
    total_match_count: int = 0


def _by_name(cards: Iterable[Card]) -> list[Card]:
    return sorted(cards, key=lambda c: c.name)


def _by_name_desc(cards: Iterable[Card]) -> list[Card]:
    return sorted(cards, key=lambda c: c.name, reverse=True)


def _by_release_date(cards: Iterable[Card]) -> list[Card]:
    return sorted(cards, key=lambda c: c.release_timestamp)


def _by_release_date_desc(cards: Iterable[Card]) -> list[Card]:
    return sorted(cards, key=lambda c: c.release_timestamp, reverse=True)


def _by_set_order(cards: Iterable[Card]) -> list[Card]:
    # TODO: break ties on the printed card number once numbers like "TG05" and "12a" have an ordering
    return sorted(cards, key=lambda c: (c.release_timestamp, c.name))


# Sort keys understood by local views. `sorted` is stable, so equal keys keep
# their input order and every sort is deterministic.
SORTERS: dict[str, CardSorter] = {
    SORT_NAME: _by_name,
    SORT_NAME_DESC: _by_name_desc,
    SORT_RELEASE_DATE: _by_release_date,
    SORT_RELEASE_DATE_DESC: _by_release_date_desc,
    SORT_SET_ORDER: _by_set_order,
}


def filter_by_search(cards: Iterable[Card], search_term: str) -> list[Card]:
    """Keep cards whose name contains the term (case-insensitive). Empty term keeps all."""
    if not search_term:
        return list(cards)
    needle = search_term.lower()
    return [card for card in cards if needle in card.name.lower()]


def filter_by_set(cards: Iterable[Card], set_filter: str) -> list[Card]:
    """Keep cards from one set, or all cards for the "all" sentinel."""
    if set_filter == ALL_SETS:
        return list(cards)
    return [card for card in cards if card.set_id == set_filter]


def sort_cards(cards: Iterable[Card], sort_key: str) -> list[Card]:
    """Return a sorted copy. Unknown keys fall back to name order."""
    sorter = SORTERS.get(sort_key, _by_name)
    return sorter(cards)


def process_cards(
    cards: Iterable[Card],
    search_term: str,
    set_filter: str,
    sort_key: str,
    page: int,
    page_size: int,
) -> ProcessedCards:
    """
    Filter, sort and page a resident card list.

    Steps run in order: search filter, set filter, sort, slice to page.
    Pages past the end (and pages below 1) yield an empty slice rather than
    an error; clamping the page number is the caller's job.

    Args:
        cards: Candidate cards (not modified)
        search_term: Case-insensitive substring of the card name; "" matches all
        set_filter: Set ID, or "all" for no set filter
        sort_key: One of SORTERS' keys
        page: 1-indexed page number
        page_size: Cards per page

    Returns:
        ProcessedCards with the page slice and the number of cards that
        matched before paging
    """
    matched = filter_by_set(filter_by_search(cards, search_term), set_filter)
    ordered = sort_cards(matched, sort_key)

    if page < 1 or page_size <= 0:
        return ProcessedCards(page_items=[], total_match_count=len(ordered))

    start = (page - 1) * page_size
    return ProcessedCards(
        page_items=ordered[start : start + page_size],
        total_match_count=len(ordered),
    )
