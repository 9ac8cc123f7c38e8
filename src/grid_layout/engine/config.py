"""
Module: engine.config

Purpose:
    Configuration for a grid: column count, compaction and the default
    interaction flags. Passed into operations, never stored in a layout.

Key Classes:
    - GridConfig: Immutable grid configuration

Dependencies:
    - dataclasses (std)

Used By:
    - engine.controller
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from grid_layout.core.models import CompactType, GridItem


DEFAULT_COLS = 12


@dataclass(frozen=True)
class GridConfig:
    """
    Configuration for a grid (immutable).

    Attributes:
        cols: Number of columns
        compact_type: Compaction applied after every interaction
        prevent_collision: If True, moves and resizes that collide are
            rejected instead of displacing neighbours
        is_draggable: Default for items without their own override
        is_resizable: Default for items without their own override
        max_rows: Rows an interaction may move or grow an item into
            (None = unbounded)

    Example:
        >>> config = GridConfig(cols=6, compact_type="horizontal")
        >>> config.compact_type
        <CompactType.HORIZONTAL: 'horizontal'>
    """

    cols: int = DEFAULT_COLS
    compact_type: CompactType = CompactType.VERTICAL
    prevent_collision: bool = False
    is_draggable: bool = True
    is_resizable: bool = True
    max_rows: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.cols <= 0:
            raise ValueError(f"cols must be positive: {self.cols}")
        if self.max_rows is not None and self.max_rows <= 0:
            raise ValueError(f"max_rows must be positive: {self.max_rows}")
        # Frozen, so normalise through object.__setattr__
        object.__setattr__(self, "compact_type", CompactType.coerce(self.compact_type))

    # ─────────────────────────────────────────────────────────────────────────
    # Per-item flags
    # ─────────────────────────────────────────────────────────────────────────

    def item_is_draggable(self, item: GridItem) -> bool:
        """
        Whether the interaction layer may drag `item`.

        Static items never are. An item override can only turn dragging
        off, never on when the grid default is off.
        """
        return not item.static and self.is_draggable and item.is_draggable is not False

    def item_is_resizable(self, item: GridItem) -> bool:
        """Whether the interaction layer may resize `item` (same rules as dragging)."""
        return not item.static and self.is_resizable and item.is_resizable is not False

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GridConfig:
        """
        Build a config from camelCase option names.

        A legacy `verticalCompact: false` disables compaction regardless
        of `compactType`.

        Args:
            data: Dict with any of cols, compactType, verticalCompact,
                preventCollision, isDraggable, isResizable, maxRows

        Returns:
            GridConfig instance
        """
        compact_type = data.get("compactType", CompactType.VERTICAL)
        if data.get("verticalCompact") is False:
            compact_type = None
        return cls(
            cols=int(data.get("cols", DEFAULT_COLS)),
            compact_type=CompactType.coerce(compact_type),
            prevent_collision=bool(data.get("preventCollision", False)),
            is_draggable=bool(data.get("isDraggable", True)),
            is_resizable=bool(data.get("isResizable", True)),
            max_rows=data.get("maxRows"),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "cols": self.cols,
            "compactType": self.compact_type.value,
            "preventCollision": self.prevent_collision,
            "isDraggable": self.is_draggable,
            "isResizable": self.is_resizable,
        }
        if self.max_rows is not None:
            d["maxRows"] = self.max_rows
        return d
