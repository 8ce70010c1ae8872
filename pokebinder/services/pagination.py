"""
Pagination range calculator.

Computes the page labels for a compact pager: the first page, the last page,
a window of sibling pages around the current page, and GAP markers standing in
for collapsed runs. Once the page count exceeds the pager's slot count the
output always has exactly `2 * sibling_count + 5` entries, so the pager keeps a
constant width.

INVARIANT: Page numbers strictly increase; at most two GAPs appear; a GAP
always replaces two or more hidden pages.
"""

from pokebinder.config import DEFAULT_SIBLING_COUNT

# Marker for a collapsed run of page numbers
GAP = "..."

PageItem = int | str


def total_pages(total_count: int, page_size: int) -> int:
    """Number of pages needed for `total_count` items; 0 for invalid input."""
    if total_count <= 0 or page_size <= 0:
        return 0
    return -(-total_count // page_size)


def compute_range(
    current_page: int,
    total_count: int,
    page_size: int,
    sibling_count: int = DEFAULT_SIBLING_COUNT,
) -> list[PageItem]:
    """
    Compute pager labels for the current page.

    Args:
        current_page: 1-indexed current page; values past the last page are
            treated as the last page
        total_count: Total number of items across all pages
        page_size: Items per page
        sibling_count: Pages shown on each side of the current page

    Returns:
        Page numbers and GAP markers in display order. Empty when there is
        nothing to page (no items, page 0) or the input is invalid; this is a
        rendering aid and never raises.

    Examples:
        >>> compute_range(10, 200, 10)
        [1, '...', 9, 10, 11, '...', 20]
        >>> compute_range(1, 30, 10)
        [1, 2, 3]
    """
    page_count = total_pages(total_count, page_size)
    if page_count == 0 or current_page <= 0 or sibling_count < 0:
        return []

    current = min(current_page, page_count)

    # first + last + current + siblings + two gap slots
    slot_count = 2 * sibling_count + 5
    if page_count <= slot_count:
        return list(range(1, page_count + 1))

    left_sibling = max(current - sibling_count, 1)
    right_sibling = min(current + sibling_count, page_count)

    # A gap is only worth it when it hides at least two pages
    show_left_gap = left_sibling > 3
    show_right_gap = right_sibling < page_count - 2

    # Pages shown on an edge when only the opposite side collapses
    edge_count = 2 * sibling_count + 3

    if not show_left_gap and show_right_gap:
        return [*range(1, edge_count + 1), GAP, page_count]

    if show_left_gap and not show_right_gap:
        return [1, GAP, *range(page_count - edge_count + 1, page_count + 1)]

    if show_left_gap and show_right_gap:
        return [1, GAP, *range(left_sibling, right_sibling + 1), GAP, page_count]

    return list(range(1, page_count + 1))
