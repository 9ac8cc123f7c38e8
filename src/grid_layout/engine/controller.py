"""
Module: engine.controller

Purpose:
    Hold the current layout of one grid and thread it through the
    interaction sequence the surrounding UI drives:
    sync → drag/resize start → drag/resize steps → drag/resize stop.

Key Classes:
    - GridLayoutController: Stateful wrapper around the pure engine
    - InteractionResult: What one interaction step produced

Flow per step:
    1. Look up the item (unknown ids are no-ops)
    2. move_element() / resize_element()
    3. compact() to settle the layout and locate the placeholder
    4. On stop, notify `on_layout_change` if the layout differs from the
       one the interaction started with

Dependencies:
    - engine: compactor, mover, synchronizer, accessors
    - core.utils.serialization: deserialize_layout (validates first)

Used By:
    - The interaction/rendering layer (outside this package)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence

from grid_layout.core.models import GridItem
from grid_layout.core.utils.serialization import deserialize_layout

from .accessors import bottom, clone_layout, clone_layout_item, get_layout_item, layouts_equal
from .compactor import compact
from .config import GridConfig
from .mover import move_element, resize_element
from .synchronizer import synchronize_layout_with_children

logger = logging.getLogger(__name__)

LayoutCallback = Callable[[List[GridItem]], None]


@dataclass(frozen=True)
class InteractionResult:
    """
    Outcome of one interaction step (immutable).

    Attributes:
        layout: Settled layout after the step
        old_item: Item as it was when the interaction started
        item: Item as it is now
        placeholder: Where the item settles (None outside a live step)
    """

    layout: List[GridItem]
    old_item: Optional[GridItem]
    item: Optional[GridItem]
    placeholder: Optional[GridItem] = None


class GridLayoutController:
    """
    Stateful driver for one grid.

    Every method returns new values; the layouts handed out are never
    mutated afterwards.

    Example:
        >>> grid = GridLayoutController(GridConfig(cols=4), child_ids=["a", "b"])
        >>> _ = grid.drag_start("a")
        >>> result = grid.drag_stop("a", 1, 0)
    """

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        layout: Optional[Sequence[Any]] = None,
        child_ids: Optional[Iterable[str]] = None,
        on_layout_change: Optional[LayoutCallback] = None,
        hints: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ):
        self.config = config or GridConfig()
        self._on_layout_change = on_layout_change
        self._hints = dict(hints or {})

        base = self._external_layout(layout) if layout is not None else []
        # Without explicit ids the layout defines the children
        if child_ids is None:
            child_ids = [item.id for item in base]
        self._child_ids: List[str] = [str(c) for c in child_ids]
        self._layout = self._synchronize(base)

        self._old_layout: Optional[List[GridItem]] = None
        self._old_item: Optional[GridItem] = None
        self._active: Optional[GridItem] = None

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def layout(self) -> List[GridItem]:
        return clone_layout(self._layout)

    @property
    def child_ids(self) -> List[str]:
        return list(self._child_ids)

    @property
    def placeholder(self) -> Optional[GridItem]:
        """Where the item under interaction will settle, if any."""
        return self._active

    @property
    def height_in_rows(self) -> int:
        return bottom(self._layout)

    # ─────────────────────────────────────────────────────────────────────────
    # Synchronization
    # ─────────────────────────────────────────────────────────────────────────

    def set_layout(self, layout: Sequence[Any]) -> List[GridItem]:
        """
        Replace the layout with one supplied from outside.

        Raises:
            ValidationError: If the layout is malformed
        """
        base = self._external_layout(layout)
        return self._resync(base)

    def set_children(self, child_ids: Iterable[str]) -> List[GridItem]:
        """Add and drop items to match a new id list."""
        self._child_ids = [str(c) for c in child_ids]
        return self._resync(self._layout)

    def reconfigure(self, config: GridConfig) -> List[GridItem]:
        """Switch to a new configuration (e.g. a column count change)."""
        self.config = config
        return self._resync(self._layout)

    # ─────────────────────────────────────────────────────────────────────────
    # Drag
    # ─────────────────────────────────────────────────────────────────────────

    def drag_start(self, item_id: str) -> Optional[InteractionResult]:
        item = self._interactive_item(item_id, self.config.item_is_draggable)
        if item is None:
            return None
        self._begin(item)
        return InteractionResult(self.layout, self._old_item, item)

    def drag(self, item_id: str, x: int, y: int) -> Optional[InteractionResult]:
        """Move the item under drag and settle the layout around it."""
        item = self._interactive_item(item_id, self.config.item_is_draggable)
        if item is None:
            return None
        self._layout = self._settle(self._moved(item, x, y))
        self._active = get_layout_item(self._layout, item_id)
        return InteractionResult(self.layout, self._old_item, self._active, self._active)

    def drag_stop(self, item_id: str, x: int, y: int) -> Optional[InteractionResult]:
        item = self._interactive_item(item_id, self.config.item_is_draggable)
        if item is None:
            return None
        before = self._layout
        self._layout = self._settle(self._moved(item, x, y))
        return self._finish(item_id, before)

    # ─────────────────────────────────────────────────────────────────────────
    # Resize
    # ─────────────────────────────────────────────────────────────────────────

    def resize_start(self, item_id: str) -> Optional[InteractionResult]:
        item = self._interactive_item(item_id, self.config.item_is_resizable)
        if item is None:
            return None
        self._begin(item)
        return InteractionResult(self.layout, self._old_item, item)

    def resize(self, item_id: str, w: int, h: int) -> Optional[InteractionResult]:
        """Resize the item and settle the layout around it."""
        item = self._interactive_item(item_id, self.config.item_is_resizable)
        if item is None:
            return None
        self._layout = self._settle(self._resized(item, w, h))
        self._active = get_layout_item(self._layout, item_id)
        return InteractionResult(self.layout, self._old_item, self._active, self._active)

    def resize_stop(self, item_id: str, w: int, h: int) -> Optional[InteractionResult]:
        item = self._interactive_item(item_id, self.config.item_is_resizable)
        if item is None:
            return None
        before = self._layout
        self._layout = self._settle(self._resized(item, w, h))
        return self._finish(item_id, before)

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _external_layout(self, layout: Sequence[Any]) -> List[GridItem]:
        """Validate and convert a layout from outside the engine."""
        return deserialize_layout(layout, context="layout")

    def _synchronize(self, base: Sequence[GridItem]) -> List[GridItem]:
        return synchronize_layout_with_children(
            base,
            self._child_ids,
            self.config.cols,
            self.config.compact_type,
            hints=self._hints,
        )

    def _resync(self, base: Sequence[GridItem]) -> List[GridItem]:
        old_layout = self._layout
        self._layout = self._synchronize(base)
        self._notify(old_layout)
        return self.layout

    def _interactive_item(
        self,
        item_id: str,
        allowed: Callable[[GridItem], bool],
    ) -> Optional[GridItem]:
        item = get_layout_item(self._layout, item_id)
        if item is None:
            logger.debug(f"No item with id {item_id!r}; ignoring interaction")
            return None
        if not allowed(item):
            logger.debug(f"Item {item_id!r} does not accept this interaction")
            return None
        return item

    def _begin(self, item: GridItem) -> None:
        self._old_item = clone_layout_item(item)
        self._old_layout = self._layout
        self._active = None

    def _moved(self, item: GridItem, x: int, y: int) -> List[GridItem]:
        if self.config.max_rows is not None:
            y = min(y, self.config.max_rows - item.h)
        return move_element(
            self._layout,
            item,
            x,
            y,
            True,
            self.config.prevent_collision,
            self.config.compact_type,
            self.config.cols,
        )

    def _resized(self, item: GridItem, w: int, h: int) -> List[GridItem]:
        if self.config.max_rows is not None:
            h = max(1, min(h, self.config.max_rows - item.y))
        return resize_element(
            self._layout,
            item,
            w,
            h,
            self.config.prevent_collision,
            self.config.compact_type,
            self.config.cols,
        )

    def _settle(self, layout: Sequence[GridItem]) -> List[GridItem]:
        return compact(layout, self.config.compact_type, self.config.cols)

    def _finish(self, item_id: str, before: List[GridItem]) -> InteractionResult:
        result = InteractionResult(
            self.layout,
            self._old_item,
            get_layout_item(self._layout, item_id),
        )
        old_layout = self._old_layout if self._old_layout is not None else before
        self._old_layout = None
        self._old_item = None
        self._active = None
        self._notify(old_layout)
        return result

    def _notify(self, old_layout: Optional[Sequence[GridItem]]) -> None:
        if old_layout is not None and layouts_equal(old_layout, self._layout):
            return
        if self._on_layout_change is not None:
            self._on_layout_change(self.layout)
