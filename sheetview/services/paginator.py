"""
Paginator: fixed-size windows over a filtered row sequence.

Every function here is pure. Page boundaries depend only on the row count,
the page size and the page index; the current page is owned by the caller.
"""

import math
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def _check_page_size(page_size: int) -> None:
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")


def page(rows: Sequence[T], page_size: int, page_index: int) -> Sequence[T]:
    """
    Slice one page out of `rows`.

    Args:
        rows: The full filtered sequence.
        page_size: Rows per page (positive).
        page_index: 0-based page index (non-negative).

    Returns:
        rows[start:end] for the page; an empty slice when the page starts
        past the end of the sequence.

    Raises:
        ValueError: If page_size is not positive or page_index is negative.
    """
    _check_page_size(page_size)
    if page_index < 0:
        raise ValueError(f"page_index must be non-negative, got {page_index}")

    start = page_index * page_size
    if start >= len(rows):
        return rows[0:0]
    end = min(start + page_size, len(rows))
    return rows[start:end]


def page_count(total_rows: int, page_size: int) -> int:
    """ceil(total_rows / page_size); 0 when there are no rows."""
    _check_page_size(page_size)
    if total_rows <= 0:
        return 0
    return math.ceil(total_rows / page_size)


def clamp_page_index(page_index: int, total_rows: int, page_size: int) -> int:
    """
    Clamp an index into [0, page_count - 1], or 0 when there are no pages.
    """
    pages = page_count(total_rows, page_size)
    if pages == 0:
        return 0
    return max(0, min(page_index, pages - 1))


def page_window(current: int, total_pages: int, width: int = 5) -> list[int]:
    """
    Page indices a pager bar shows around the current page.

    The window holds at most `width` pages, keeps the current page roughly
    centred and slides to stay within [0, total_pages).

    Args:
        current: Current 0-based page index.
        total_pages: Number of pages.
        width: Maximum number of page buttons.

    Returns:
        Ascending list of page indices.
    """
    if total_pages <= 0 or width <= 0:
        return []

    width = min(width, total_pages)
    first = max(0, current - width // 2)
    first = min(first, total_pages - width)
    return list(range(first, first + width))
