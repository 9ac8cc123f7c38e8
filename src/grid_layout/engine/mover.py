"""
Module: engine.mover

Purpose:
    Relocate or resize one item and move its neighbours out of the way
    without letting an uninvolved item jump past another.

Key Functions:
    - move_element(): Move an item to a requested cell
    - resize_element(): Change an item's size

Algorithm:
    Collisions at the new position are visited in compaction order
    (reversed when the item moves toward the leading edge). For the
    collision the user caused directly, the neighbour is first offered
    the space just before the moved item; only if that space is taken is
    it displaced past the moved item's trailing edge. Displaced items
    resolve their own collisions the same way (chain reaction). Items
    already moved in this operation are never moved again, which keeps
    the recursion finite. A last pass pushes down any item the chain
    left overlapping another, so the result never holds an overlapping
    non-static pair.

    Neither function compacts. Callers run compact() afterwards.

Dependencies:
    - engine.accessors: ordering, lookups
    - engine.geometry: collides

Used By:
    - engine.controller
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from grid_layout.core.models import CompactType, GridItem

from .accessors import (
    clone_layout,
    get_all_collisions,
    get_first_collision,
    get_layout_item,
    get_statics,
    index_of,
    sort_layout_items,
    sort_layout_items_by_row_col,
)
from .geometry import collides

logger = logging.getLogger(__name__)

ItemRef = Union[GridItem, str]


def move_element(
    layout: Sequence[GridItem],
    item: ItemRef,
    x: Optional[int],
    y: Optional[int],
    is_user_action: bool = False,
    prevent_collision: bool = False,
    compact_type: Union[CompactType, str, None] = CompactType.VERTICAL,
    cols: Optional[int] = None,
) -> List[GridItem]:
    """
    Move one item to (x, y) and push colliding items out of the way.

    Args:
        layout: Current layout (not modified)
        item: Item to move, or its id
        x: Requested column (None keeps the current column)
        y: Requested row (None keeps the current row)
        is_user_action: True when the move comes straight from the user;
            enables swapping a neighbour to the space before the item
        prevent_collision: Reject the move if the new position collides
        compact_type: Gravity direction used to resolve collisions
            (NONE resolves like VERTICAL)
        cols: Number of grid columns; when given, x is clamped to
            [0, cols - w]

    Returns:
        New layout. Unchanged (as a copy) if the item is unknown, static,
        already at (x, y), or the move was rejected.

    Example:
        >>> layout = [GridItem("a", 0, 0, 1, 1), GridItem("b", 1, 0, 1, 1)]
        >>> move_element(layout, "a", 1, 0, True, False, CompactType.VERTICAL, 2)
        [GridItem('a', 1, 0, 1x1), GridItem('b', 1, 1, 1x1)]
    """
    compact_type = CompactType.coerce(compact_type)
    item_id = item if isinstance(item, str) else item.id
    current = get_layout_item(layout, item_id)
    if current is None:
        logger.debug(f"move_element: no item with id {item_id!r}")
        return clone_layout(layout)
    if current.static:
        return clone_layout(layout)

    if x is not None:
        if cols is not None:
            x = min(x, cols - current.w)
        x = max(0, x)
    if y is not None:
        y = max(0, y)

    target = (current.x if x is None else x, current.y if y is None else y)
    if target == current.position:
        return clone_layout(layout)

    working = [entry.with_moved(False) for entry in layout]
    accepted = _move(working, item_id, x, y, is_user_action, prevent_collision, compact_type)
    if not accepted:
        return clone_layout(layout)
    _clear_overlaps(working, item_id)
    return working


def resize_element(
    layout: Sequence[GridItem],
    item: ItemRef,
    w: int,
    h: int,
    prevent_collision: bool = False,
    compact_type: Union[CompactType, str, None] = CompactType.VERTICAL,
    cols: Optional[int] = None,
) -> List[GridItem]:
    """
    Resize one item, keeping its top-left corner.

    The size is limited by the item's min/max bounds and, when `cols` is
    given, by the columns left to its right. With `prevent_collision`, a
    size that collides with anything is rejected as a whole; otherwise
    colliding non-static items are displaced along the gravity axis.

    Args:
        layout: Current layout (not modified)
        item: Item to resize, or its id
        w: Requested width
        h: Requested height
        prevent_collision: Reject the resize if the new size collides
        compact_type: Gravity direction used to displace neighbours
        cols: Number of grid columns

    Returns:
        New layout, or an unchanged copy if nothing was resized
    """
    compact_type = CompactType.coerce(compact_type)
    item_id = item if isinstance(item, str) else item.id
    index = index_of(layout, item_id)
    if index < 0:
        logger.debug(f"resize_element: no item with id {item_id!r}")
        return clone_layout(layout)
    current = layout[index]
    if current.static:
        return clone_layout(layout)

    w, h = current.clamp_size(w, h)
    if cols is not None:
        w = max(1, min(w, cols - current.x))
    if (w, h) == (current.w, current.h):
        return clone_layout(layout)

    resized = current.with_size(w, h)
    if prevent_collision and get_first_collision(layout, resized) is not None:
        logger.debug(f"Resize of {item_id} to {w}x{h} prevented by collision")
        return clone_layout(layout)

    logger.debug(f"Resizing element {item_id} from {current.w}x{current.h} to {w}x{h}")
    working = [entry.with_moved(False) for entry in layout]
    # Flag the resized item so displaced neighbours never push it back
    working[index] = resized.with_moved(True)

    for collision in get_all_collisions(sort_layout_items(working, compact_type), resized):
        collision = get_layout_item(working, collision.id)
        if collision.static or collision.moved or not collides(resized, collision):
            continue
        _move_away(working, resized, collision, False, compact_type)

    working[index] = working[index].with_moved(False)
    _clear_overlaps(working, item_id)
    return working


def _moving_toward_leading_edge(
    old: GridItem,
    x: Optional[int],
    y: Optional[int],
    compact_type: CompactType,
) -> bool:
    if compact_type is CompactType.VERTICAL and y is not None:
        return old.y >= y
    if compact_type is CompactType.HORIZONTAL and x is not None:
        return old.x >= x
    return False


def _move(
    working: List[GridItem],
    item_id: str,
    x: Optional[int],
    y: Optional[int],
    is_user_action: bool,
    prevent_collision: bool,
    compact_type: CompactType,
) -> bool:
    """
    Move working[item_id] and resolve the collisions it causes.

    Returns:
        False if the move was rejected by `prevent_collision`
    """
    index = index_of(working, item_id)
    old = working[index]
    if old.static:
        return True

    new_x = old.x if x is None else x
    new_y = old.y if y is None else y
    if (new_x, new_y) == old.position:
        return True

    logger.debug(f"Moving element {item_id} to [{new_x},{new_y}] from [{old.x},{old.y}]")
    item = old.with_position(new_x, new_y, moved=True)
    working[index] = item

    # Nearest collisions first
    ordered = sort_layout_items(working, compact_type)
    if _moving_toward_leading_edge(old, x, y, compact_type):
        ordered.reverse()
    collisions = get_all_collisions(ordered, item)

    if prevent_collision and collisions:
        logger.debug(f"Collision prevented on {item_id}, reverting")
        working[index] = old
        return False

    for collision in collisions:
        # Earlier resolutions may have moved either item
        collision = get_layout_item(working, collision.id)
        item = get_layout_item(working, item_id)
        if collision.moved or not collides(item, collision):
            continue
        logger.debug(
            f"Resolving collision between {item_id} at [{item.x},{item.y}] "
            f"and {collision.id} at [{collision.x},{collision.y}]"
        )
        if collision.static:
            # A static item cannot move, so this item has to
            _move_away(working, collision, item, is_user_action, compact_type)
        else:
            _move_away(working, item, collision, is_user_action, compact_type)
    return True


def _move_away(
    working: List[GridItem],
    collides_with: GridItem,
    item_to_move: GridItem,
    is_user_action: bool,
    compact_type: CompactType,
) -> None:
    """
    Move `item_to_move` off `collides_with`.

    On a direct user collision the item goes to the space just before
    `collides_with` if that space is free; this is what lets a neighbour
    swap places instead of shoving a third item out of order. Otherwise
    it is displaced to just past the trailing edge of `collides_with`.
    """
    horizontal = compact_type is CompactType.HORIZONTAL

    if is_user_action:
        if horizontal:
            target = item_to_move.with_position(
                max(collides_with.x - item_to_move.w, 0), item_to_move.y
            )
        else:
            target = item_to_move.with_position(
                item_to_move.x, max(collides_with.y - item_to_move.h, 0)
            )
        # Only other items can block the space before collides_with
        if get_first_collision(working, target) is None:
            logger.debug(f"Doing reverse collision on {item_to_move.id} up to [{target.x},{target.y}]")
            _move(
                working,
                item_to_move.id,
                target.x if horizontal else None,
                None if horizontal else target.y,
                False,
                False,
                compact_type,
            )
            return

    if horizontal:
        _move(working, item_to_move.id, collides_with.x + collides_with.w, None, False, False, compact_type)
    else:
        _move(working, item_to_move.id, None, collides_with.y + collides_with.h, False, False, compact_type)


def _clear_overlaps(working: List[GridItem], anchor_id: str) -> None:
    """
    Push down any non-static item still overlapping an earlier one.

    The chain reaction never moves an item twice, so a displaced item can
    come to rest on one that already moved. Statics stay put, the anchor
    (the item the caller moved or resized) is settled next, and the rest
    follow in row order. Items only move down here, so this terminates.
    """
    settled = get_statics(working)
    anchor = get_layout_item(working, anchor_id)
    rest = [
        item for item in sort_layout_items_by_row_col(working)
        if not item.static and item.id != anchor_id
    ]
    for item in [anchor, *rest]:
        collision = get_first_collision(settled, item)
        if collision is not None:
            old_y = item.y
            while collision is not None:
                item = item.with_position(item.x, collision.y + collision.h, moved=True)
                collision = get_first_collision(settled, item)
            logger.debug(f"Cleared leftover overlap on {item.id}: y={old_y}->{item.y}")
            working[index_of(working, item.id)] = item
        settled.append(item)
