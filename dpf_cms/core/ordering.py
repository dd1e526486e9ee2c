"""
Display-order helpers.

Banners, tags and partners share one table-wide order sequence; organization
members are ordered within their group.
"""

from __future__ import annotations

from typing import Iterable, Optional


def next_available_order(used: Iterable[Optional[int]]) -> int:
    """Return the lowest non-negative integer not present in ``used``.

    >>> next_available_order([0, 1, 3])
    2
    >>> next_available_order([])
    0
    """
    taken = {value for value in used if value is not None and value >= 0}
    candidate = 0
    while candidate in taken:
        candidate += 1
    return candidate


def next_order_at_end(used: Iterable[Optional[int]]) -> int:
    """Return one past the highest order in ``used``, or 0 for an empty group.

    >>> next_order_at_end([0, 4, 2])
    5
    """
    values = [value for value in used if value is not None]
    if not values:
        return 0
    return max(values) + 1
