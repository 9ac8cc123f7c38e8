"""
Module: item

Purpose:
    Provides the GridItem dataclass - one rectangle placed on the integer
    grid. Replaces loosely shaped dicts with an explicit record whose
    optional bounds use an UNBOUNDED sentinel.

Key Functions:
    - GridItem.with_position(x, y): Copy at a new position
    - GridItem.with_size(w, h): Copy with a new size
    - GridItem.clamp_size(w, h): Apply min/max constraints to a size
    - GridItem.to_dict(): Serialize using the camelCase wire keys
    - GridItem.from_dict(data): Deserialize from the wire format

Dependencies:
    - dataclasses (std)
    - math (std)

Used By:
    - engine (all modules)
    - core.utils.serialization
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Union

# Sentinel for an absent max_w / max_h
UNBOUNDED = math.inf

Bound = Union[int, float]


@dataclass(frozen=True, slots=True)
class GridItem:
    """
    A rectangle placed on the grid (immutable).

    Coordinates are grid cells: (x, y) is the top-left cell, the item covers
    columns [x, x + w) and rows [y, y + h).

    Attributes:
        id: Identifier, unique within a layout
        x: Column of the left edge
        y: Row of the top edge
        w: Width in columns
        h: Height in rows
        min_w: Smallest width allowed by resize
        max_w: Largest width allowed by resize (UNBOUNDED = no limit)
        min_h: Smallest height allowed by resize
        max_h: Largest height allowed by resize (UNBOUNDED = no limit)
        static: Never moves or resizes; still blocks other items
        is_draggable: Per-item override of the engine default (None = inherit)
        is_resizable: Per-item override of the engine default (None = inherit)
        moved: Set when the last engine operation changed the position.
            Transient, so it takes no part in equality.

    Invariants:
        - x >= 0, y >= 0
        - w >= 1, h >= 1
        - 1 <= min_w <= max_w, 1 <= min_h <= max_h

    Example:
        >>> item = GridItem("a", x=0, y=1, w=2, h=3)
        >>> item.bottom
        4
        >>> item.with_position(1, 0).right
        3
    """

    id: str
    x: int
    y: int
    w: int
    h: int
    min_w: int = 1
    max_w: Bound = UNBOUNDED
    min_h: int = 1
    max_h: Bound = UNBOUNDED
    static: bool = False
    is_draggable: Optional[bool] = None
    is_resizable: Optional[bool] = None
    moved: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.x < 0:
            raise ValueError(f"x must be >= 0: {self.x}")
        if self.y < 0:
            raise ValueError(f"y must be >= 0: {self.y}")
        if self.w < 1:
            raise ValueError(f"w must be >= 1: {self.w}")
        if self.h < 1:
            raise ValueError(f"h must be >= 1: {self.h}")
        if self.min_w < 1 or self.max_w < self.min_w:
            raise ValueError(f"invalid width bounds: [{self.min_w}, {self.max_w}]")
        if self.min_h < 1 or self.max_h < self.min_h:
            raise ValueError(f"invalid height bounds: [{self.min_h}, {self.max_h}]")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def right(self) -> int:
        """First column to the right of the item (exclusive)."""
        return self.x + self.w

    @property
    def bottom(self) -> int:
        """First row below the item (exclusive)."""
        return self.y + self.h

    @property
    def position(self) -> tuple[int, int]:
        """Top-left corner as (x, y)."""
        return (self.x, self.y)

    # ─────────────────────────────────────────────────────────────────────────
    # Copies
    # ─────────────────────────────────────────────────────────────────────────

    def with_position(self, x: int, y: int, *, moved: Optional[bool] = None) -> GridItem:
        """
        Copy of this item at (x, y).

        Args:
            x: New column
            y: New row
            moved: New moved flag (None keeps the current one)
        """
        return replace(self, x=x, y=y, moved=self.moved if moved is None else moved)

    def with_size(self, w: int, h: int) -> GridItem:
        """Copy of this item with a new size."""
        return replace(self, w=w, h=h)

    def with_moved(self, moved: bool) -> GridItem:
        """Copy with the given moved flag (self if it already matches)."""
        if self.moved == moved:
            return self
        return replace(self, moved=moved)

    def clamp_size(self, w: int, h: int) -> tuple[int, int]:
        """
        Apply this item's resize constraints to a requested size.

        Args:
            w: Requested width
            h: Requested height

        Returns:
            (w, h) limited to [min_w, max_w] and [min_h, max_h]
        """
        w = int(max(self.min_w, min(w, self.max_w)))
        h = int(max(self.min_h, min(h, self.max_h)))
        return w, h

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to the camelCase wire format.

        Optional fields are only written when they differ from the default.

        Returns:
            Dict with i, x, y, w, h and any non-default options
        """
        d: dict[str, Any] = {"i": self.id, "x": self.x, "y": self.y, "w": self.w, "h": self.h}
        if self.min_w != 1:
            d["minW"] = self.min_w
        if self.max_w != UNBOUNDED:
            d["maxW"] = self.max_w
        if self.min_h != 1:
            d["minH"] = self.min_h
        if self.max_h != UNBOUNDED:
            d["maxH"] = self.max_h
        if self.static:
            d["static"] = True
        if self.is_draggable is not None:
            d["isDraggable"] = self.is_draggable
        if self.is_resizable is not None:
            d["isResizable"] = self.is_resizable
        if self.moved:
            d["moved"] = True
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, default_id: Optional[str] = None) -> GridItem:
        """
        Deserialize from the wire format.

        Args:
            data: Dict with x, y, w, h and optionally i (or id) and options
            default_id: Id to use when the dict carries none

        Returns:
            GridItem instance

        Raises:
            ValueError: If no id is available or the geometry is invalid
        """
        item_id = data.get("i", data.get("id", default_id))
        if item_id is None:
            raise ValueError("grid item has no id")
        return cls(
            id=str(item_id),
            x=_as_int(data["x"], "x"),
            y=_as_int(data["y"], "y"),
            w=_as_int(data["w"], "w"),
            h=_as_int(data["h"], "h"),
            min_w=_as_int(data.get("minW", 1), "minW"),
            max_w=_as_bound(data.get("maxW", UNBOUNDED), "maxW"),
            min_h=_as_int(data.get("minH", 1), "minH"),
            max_h=_as_bound(data.get("maxH", UNBOUNDED), "maxH"),
            static=bool(data.get("static", False)),
            is_draggable=data.get("isDraggable"),
            is_resizable=data.get("isResizable"),
            moved=bool(data.get("moved", False)),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        flags = " static" if self.static else ""
        return f"GridItem({self.id!r}, {self.x}, {self.y}, {self.w}x{self.h}{flags})"


def _as_int(value: Any, name: str) -> int:
    """Convert a wire number to int. Non-integral floats are refused."""
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{name} must be an integer: {value}")
    return int(value)


def _as_bound(value: Any, name: str) -> Bound:
    """Like _as_int, but an infinite max bound stays UNBOUNDED."""
    if value == UNBOUNDED:
        return UNBOUNDED
    return _as_int(value, name)
