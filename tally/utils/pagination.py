"""Pagination helpers for table endpoints."""

from __future__ import annotations

import math
from typing import List, Tuple, Union

ELLIPSIS = "..."

PageItem = Union[int, str]


def total_pages(count: int, per_page: int) -> int:
    if count <= 0 or per_page <= 0:
        return 1
    return int(math.ceil(count / per_page))


def page_bounds(page: int, per_page: int) -> Tuple[int, int]:
    """Inclusive ``(first, last)`` row indexes for a 1-based page."""
    page = max(page, 1)
    first = (page - 1) * per_page
    return first, first + per_page - 1


def page_window(current: int, pages: int, max_pages: int = 5) -> List[PageItem]:
    """Page numbers to show around ``current``, with ellipses for gaps.

    The first and last page are always present. E.g. page 6 of 12 gives
    ``[1, "...", 5, 6, 7, "...", 12]``.
    """
    if pages <= max_pages:
        return list(range(1, pages + 1))

    start = max(2, current - 1)
    end = min(pages - 1, current + 1)
    if current <= 3:
        end = min(pages - 1, 4)
    if current >= pages - 2:
        start = max(2, pages - 3)

    window: List[PageItem] = [1]
    if start > 2:
        window.append(ELLIPSIS)
    window.extend(range(start, end + 1))
    if end < pages - 1:
        window.append(ELLIPSIS)
    window.append(pages)
    return window


__all__ = ["ELLIPSIS", "page_bounds", "page_window", "total_pages"]
