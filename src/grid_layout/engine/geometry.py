"""
Module: engine.geometry

Purpose:
    Rectangle primitives on the integer grid: collision test, bounds
    correction and the no-overlap invariant check.

Key Functions:
    - collides(): Positive-area overlap test
    - correct_bounds(): Pull items back inside the column range
    - assert_no_overlaps(): Raise ConstraintViolation on overlapping items

Dependencies:
    - core.models.GridItem

Used By:
    - engine.accessors
    - engine.compactor
    - engine.mover
    - engine.synchronizer
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Sequence

from grid_layout.core.models import GridItem

logger = logging.getLogger(__name__)


class ConstraintViolation(AssertionError):
    """
    Two non-static items overlap in a layout the engine produced.

    Never a recoverable condition: it means the compactor or mover has a
    defect.
    """

    def __init__(self, message: str, first: GridItem, second: GridItem):
        super().__init__(message)
        self.first = first
        self.second = second


def collides(a: GridItem, b: GridItem) -> bool:
    """
    Check whether two rectangles overlap by a positive area.

    Rectangles that only share an edge do not collide. Ids are ignored.

    Args:
        a: First rectangle (anything with x, y, w, h)
        b: Second rectangle

    Returns:
        True if the rectangles overlap

    Example:
        >>> collides(GridItem("a", 0, 1, 1, 1), GridItem("b", 1, 2, 1, 1))
        False
    """
    if a.x + a.w <= b.x:
        return False  # a is left of b
    if a.x >= b.x + b.w:
        return False  # a is right of b
    if a.y + a.h <= b.y:
        return False  # a is above b
    if a.y >= b.y + b.h:
        return False  # a is below b
    return True


def correct_bounds(layout: Sequence[GridItem], cols: int) -> List[GridItem]:
    """
    Pull every item back inside the grid's column range.

    Each item is handled on its own; overlaps between items are left for
    the compactor.

    Args:
        layout: Items to correct
        cols: Number of grid columns

    Returns:
        New layout with w <= cols and 0 <= x <= cols - w for every item
    """
    out: List[GridItem] = []
    for item in layout:
        w = min(item.w, cols)
        x = item.x
        if x + w > cols:
            x = cols - w  # Overflows right
        if x < 0:
            x = 0  # Overflows left
        if (x, w) != (item.x, item.w):
            logger.debug(f"Corrected bounds of {item.id}: x={item.x}->{x}, w={item.w}->{w}")
            item = replace(item, x=x, w=w)
        out.append(item)
    return out


def assert_no_overlaps(layout: Sequence[GridItem], context: str = "layout") -> None:
    """
    Raise if two non-static items of the layout overlap.

    Args:
        layout: Settled layout to check
        context: Operation name used in the error message

    Raises:
        ConstraintViolation: On the first overlapping pair
    """
    movable = [item for item in layout if not item.static]
    for i, first in enumerate(movable):
        for second in movable[i + 1:]:
            if collides(first, second):
                raise ConstraintViolation(
                    f"{context}: {first!r} overlaps {second!r}", first, second
                )
