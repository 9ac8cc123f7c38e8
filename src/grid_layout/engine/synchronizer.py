"""
Module: engine.synchronizer

Purpose:
    Bring a previously known layout in line with the current list of item
    ids: keep known items, add new ones below existing content, drop the
    rest, then settle the result.

Key Functions:
    - synchronize_layout_with_children(): Main entry point

Dependencies:
    - core.models: GridItem, CompactType
    - core.schemas: validate_layout, ValidationError
    - engine.compactor, engine.geometry, engine.accessors

Used By:
    - engine.controller
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from grid_layout.core.models import CompactType, GridItem
from grid_layout.core.schemas import ValidationError, validate_layout

from .accessors import bottom, clone_layout_item, get_layout_item
from .compactor import compact
from .geometry import correct_bounds

logger = logging.getLogger(__name__)


def synchronize_layout_with_children(
    base_layout: Optional[Sequence[GridItem]],
    child_ids: Iterable[str],
    cols: int,
    compact_type: Union[CompactType, str, None],
    *,
    hints: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> List[GridItem]:
    """
    Build a settled layout holding exactly the given ids.

    Ids already in `base_layout` keep their geometry and flags. A new id
    takes its geometry from `hints` if one is given, otherwise it becomes
    a 1x1 item at column (k % cols), where k counts the new ids, on the
    row below everything assembled so far. Base items whose id is not
    listed are dropped. The result is bounds-corrected and compacted.

    Args:
        base_layout: Previously known layout (None for first mount)
        child_ids: Ids in the order the caller declares them
        cols: Number of grid columns
        compact_type: Compaction applied to the result
        hints: Optional initial geometry (wire format) per new id

    Returns:
        New settled layout in `child_ids` order

    Raises:
        ValidationError: On a duplicate id or an invalid hint
    """
    base = list(base_layout or [])
    hints = hints or {}
    layout: List[GridItem] = []
    seen: dict[str, int] = {}
    added = 0

    for index, child_id in enumerate(child_ids):
        child_id = str(child_id)
        if child_id in seen:
            raise ValidationError(
                f'Duplicate child id "{child_id}" found at children[{index}] '
                f"(first seen at children[{seen[child_id]}])",
                path=f"children[{index}]",
                index=index,
                field="i",
            )
        seen[child_id] = index

        existing = get_layout_item(base, child_id)
        if existing is not None:
            layout.append(clone_layout_item(existing))
            continue

        hint = hints.get(child_id)
        if hint is not None:
            layout.append(_item_from_hint(child_id, hint, index))
        else:
            layout.append(GridItem(child_id, x=added % cols, y=bottom(layout), w=1, h=1))
        added += 1

    dropped = len(base) - (len(layout) - added)
    if added or dropped:
        logger.info(f"Synchronized layout: {added} added, {dropped} dropped, {len(layout)} total")

    layout = correct_bounds(layout, cols)
    return compact(layout, compact_type, cols)


def _item_from_hint(child_id: str, hint: Mapping[str, Any], index: int) -> GridItem:
    """Validate a hint and build the item it describes."""
    validate_layout([hint], "children")
    try:
        return GridItem.from_dict({**hint, "i": child_id})
    except ValueError as e:
        raise ValidationError(
            f"children[{index}] has invalid geometry: {e}",
            path=f"children[{index}]",
            index=index,
        ) from e
