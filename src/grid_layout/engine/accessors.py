"""
Module: engine.accessors

Purpose:
    Lookup, copy, ordering and metric helpers over a layout.

Key Functions:
    - get_layout_item(): Find an item by id
    - get_first_collision() / get_all_collisions(): Collision queries
    - bottom(): Lowest occupied row + 1
    - sort_layout_items(): Processing order for a compaction type

Dependencies:
    - core.models: GridItem, CompactType
    - engine.geometry: collides

Used By:
    - engine.compactor
    - engine.mover
    - engine.synchronizer
    - engine.controller
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence, Union

from grid_layout.core.models import CompactType, GridItem

from .geometry import collides


def get_layout_item(layout: Sequence[GridItem], item_id: str) -> Optional[GridItem]:
    """Return the item with the given id, or None."""
    for item in layout:
        if item.id == item_id:
            return item
    return None


def index_of(layout: Sequence[GridItem], item_id: str) -> int:
    """Return the position of the item with the given id, or -1."""
    for index, item in enumerate(layout):
        if item.id == item_id:
            return index
    return -1


def get_first_collision(layout: Sequence[GridItem], item: GridItem) -> Optional[GridItem]:
    """
    First item (in layout order) colliding with `item`.

    The item itself, matched by id, is skipped.

    Args:
        layout: Items to search
        item: Rectangle to test

    Returns:
        Colliding item or None
    """
    for other in layout:
        if other.id != item.id and collides(other, item):
            return other
    return None


def get_all_collisions(layout: Sequence[GridItem], item: GridItem) -> List[GridItem]:
    """All items (in layout order) colliding with `item`, excluding itself."""
    return [other for other in layout if other.id != item.id and collides(other, item)]


def get_statics(layout: Sequence[GridItem]) -> List[GridItem]:
    """Static items of the layout, in layout order."""
    return [item for item in layout if item.static]


def bottom(layout: Sequence[GridItem]) -> int:
    """
    Row just below the lowest item.

    Example:
        >>> bottom([])
        0
        >>> bottom([GridItem("a", 0, 1, 1, 1), GridItem("b", 1, 2, 1, 1)])
        3
    """
    return max((item.y + item.h for item in layout), default=0)


def clone_layout_item(item: GridItem) -> GridItem:
    """Independent copy of an item."""
    return replace(item)


def clone_layout(layout: Sequence[GridItem]) -> List[GridItem]:
    """New list holding independent copies of every item."""
    return [clone_layout_item(item) for item in layout]


def sort_layout_items_by_row_col(layout: Sequence[GridItem]) -> List[GridItem]:
    """
    Order items top to bottom, then left to right.

    The sort is stable: items sharing a cell keep their layout order.
    """
    return sorted(layout, key=lambda item: (item.y, item.x))


def sort_layout_items_by_col_row(layout: Sequence[GridItem]) -> List[GridItem]:
    """Order items left to right, then top to bottom (stable)."""
    return sorted(layout, key=lambda item: (item.x, item.y))


def sort_layout_items(
    layout: Sequence[GridItem],
    compact_type: Union[CompactType, str, None],
) -> List[GridItem]:
    """
    Processing order for a compaction type.

    Horizontal compaction walks columns first; every other type walks rows.
    """
    if CompactType.coerce(compact_type) is CompactType.HORIZONTAL:
        return sort_layout_items_by_col_row(layout)
    return sort_layout_items_by_row_col(layout)


def layouts_equal(first: Sequence[GridItem], second: Sequence[GridItem]) -> bool:
    """
    Compare two layouts item by item.

    The transient `moved` flag is ignored, so a layout that only differs in
    bookkeeping compares equal.
    """
    return len(first) == len(second) and all(a == b for a, b in zip(first, second))
