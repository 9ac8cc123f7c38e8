"""
Module: engine

Purpose:
    The layout engine: pure functions that place, move, resize and pack
    rectangles on an integer grid, plus a stateful controller that threads
    a layout through drag and resize interactions.

Key Functions:
    - compact(): Pack a layout vertically or horizontally
    - move_element(): Move one item, displacing neighbours
    - resize_element(): Resize one item
    - synchronize_layout_with_children(): Match a layout to an id list

Key Classes:
    - GridConfig: Grid configuration
    - GridLayoutController: Interaction driver

Dependencies:
    - grid_layout.core: GridItem, CompactType, validation

Used By:
    - The interaction/rendering layer (outside this package)
"""

from .accessors import (
    bottom,
    clone_layout,
    clone_layout_item,
    get_all_collisions,
    get_first_collision,
    get_layout_item,
    get_statics,
    layouts_equal,
    sort_layout_items,
    sort_layout_items_by_col_row,
    sort_layout_items_by_row_col,
)
from .compactor import compact
from .config import GridConfig
from .controller import GridLayoutController, InteractionResult
from .geometry import ConstraintViolation, assert_no_overlaps, collides, correct_bounds
from .mover import move_element, resize_element
from .synchronizer import synchronize_layout_with_children

__all__ = [
    # Geometry
    "collides",
    "correct_bounds",
    "assert_no_overlaps",
    "ConstraintViolation",
    # Accessors
    "bottom",
    "clone_layout",
    "clone_layout_item",
    "get_all_collisions",
    "get_first_collision",
    "get_layout_item",
    "get_statics",
    "layouts_equal",
    "sort_layout_items",
    "sort_layout_items_by_col_row",
    "sort_layout_items_by_row_col",
    # Operations
    "compact",
    "move_element",
    "resize_element",
    "synchronize_layout_with_children",
    # Config / controller
    "GridConfig",
    "GridLayoutController",
    "InteractionResult",
]
