"""
Module: engine.compactor

Purpose:
    Pack a whole layout toward the top (vertical) or left (horizontal)
    edge of the grid, with no overlap between non-static items.

Key Functions:
    - compact(): Main compaction entry point

Algorithm:
    Single pass over the items in reading order:
    1. Static items seed the "placed" accumulator and never move
    2. Each other item slides toward the leading edge until it hits a
       placed item
    3. While it overlaps a placed item, it is pushed just past it; later
       items it would run into are pushed ahead first so they keep their
       order
    4. In horizontal mode, an item pushed past the right edge wraps to
       the next row and slides left again
    5. The item joins the accumulator

    Reading order means an item only ever has to be checked against
    items already placed, so the pass never backtracks. Every item ends
    at the leading edge or against a placed item, which is why a second
    pass leaves the layout unchanged. Horizontal compaction keeps each
    item on its row (wraps aside); vertical compaction keeps its column.

Dependencies:
    - engine.accessors: ordering, lookups
    - engine.geometry: collides, correct_bounds, assert_no_overlaps

Used By:
    - engine.synchronizer
    - engine.controller
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Sequence, Union

from grid_layout.core.models import CompactType, GridItem

from .accessors import bottom, get_first_collision, get_statics, sort_layout_items
from .geometry import assert_no_overlaps, collides, correct_bounds

logger = logging.getLogger(__name__)

_SIZE_OF_AXIS = {"x": "w", "y": "h"}


def compact(
    layout: Sequence[GridItem],
    compact_type: Union[CompactType, str, None],
    cols: int,
) -> List[GridItem]:
    """
    Pack a layout toward the leading edge of the compaction axis.

    The result keeps the input order. Each item's `moved` flag is reset
    and then set only if this pass changed its position. Compacting an
    already compacted layout returns an equal layout.

    Args:
        layout: Items to compact (not modified)
        compact_type: VERTICAL, HORIZONTAL or NONE
        cols: Number of grid columns

    Returns:
        New compacted layout

    Example:
        >>> compact([GridItem("a", 0, 1, 1, 1)], CompactType.VERTICAL, 10)
        [GridItem('a', 0, 0, 1x1)]
    """
    compact_type = CompactType.coerce(compact_type)
    corrected = correct_bounds(layout, cols)

    if compact_type is CompactType.NONE:
        return [item.with_moved(False) for item in corrected]

    compare_with = get_statics(corrected)
    working = sort_layout_items(corrected, compact_type)
    placed: Dict[str, GridItem] = {}

    for index in range(len(working)):
        if not working[index].static:
            _compact_item(compare_with, working, index, compact_type, cols)
            compare_with.append(working[index])
        placed[working[index].id] = working[index]

    out = [
        placed[original.id].with_moved(placed[original.id].position != original.position)
        for original in layout
    ]
    out = correct_bounds(out, cols)

    if __debug__:
        assert_no_overlaps(out, f"compact({compact_type})")

    return out


def _compact_item(
    compare_with: List[GridItem],
    working: List[GridItem],
    index: int,
    compact_type: CompactType,
    cols: int,
) -> None:
    """
    Slide working[index] toward the leading edge, then clear collisions.

    Updates `working` in place; later entries may be pushed ahead.
    """
    working[index] = _slide(compare_with, working[index], compact_type)

    axis = compact_type.axis
    size = _SIZE_OF_AXIS[axis]
    while True:
        collision = get_first_collision(compare_with, working[index])
        if collision is None:
            break
        move_to = getattr(collision, axis) + getattr(collision, size)
        _resolve_compaction_collision(working, index, move_to, axis)

        item = working[index]
        if compact_type is CompactType.HORIZONTAL and item.x + item.w > cols:
            # Wrap to the next row at the right edge, then pack left again
            item = replace(item, x=cols - item.w, y=item.y + 1)
            working[index] = _slide(compare_with, item, compact_type)


def _slide(
    compare_with: Sequence[GridItem],
    item: GridItem,
    compact_type: CompactType,
) -> GridItem:
    """
    Move `item` toward the leading edge until it meets a placed item.

    Stops on the first colliding position (or at 0); the caller resolves
    that collision.
    """
    if compact_type is CompactType.VERTICAL:
        # Rows below everything placed are all free
        item = replace(item, y=min(bottom(compare_with), item.y))
        while item.y > 0 and get_first_collision(compare_with, item) is None:
            item = replace(item, y=item.y - 1)
    else:
        while item.x > 0 and get_first_collision(compare_with, item) is None:
            item = replace(item, x=item.x - 1)
    return item


def _resolve_compaction_collision(
    working: List[GridItem],
    index: int,
    move_to: int,
    axis: str,
) -> None:
    """
    Move working[index] to `move_to` along `axis`.

    Later non-static items hit by the item one step ahead of its current
    place are first pushed to just past its new position, recursively.
    """
    size = _SIZE_OF_AXIS[axis]
    item = replace(working[index], **{axis: getattr(working[index], axis) + 1})
    working[index] = item
    reach = getattr(item, axis) + getattr(item, size)

    for other_index in range(index + 1, len(working)):
        other = working[other_index]
        # Earlier pushes break the sort order, so skip rather than stop
        if other.static or getattr(other, axis) >= reach:
            continue
        if collides(item, other):
            _resolve_compaction_collision(
                working, other_index, move_to + getattr(item, size), axis
            )

    working[index] = replace(working[index], **{axis: move_to})
