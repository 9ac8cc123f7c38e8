"""
Serialization Utilities

Converts layouts to and from the camelCase wire format used by the
interaction layer when it stores or transmits a layout.

- `serialize_*` / `deserialize_*` work on plain lists of dicts
- `layout_to_json` / `layout_from_json` work on JSON strings
- Deserialization validates first and rejects the layout as a whole
"""

from __future__ import annotations

import json
from typing import Any, List, Sequence

from ..models.item import GridItem
from ..schemas.validator import validate_layout, ValidationError


# ─────────────────────────────────────────────────────────────────────────────
# Layout Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_layout(layout: Sequence[GridItem]) -> list[dict[str, Any]]:
    """
    Serialize a layout to a list of wire dicts.

    Args:
        layout: Layout to serialize

    Returns:
        List suitable for JSON serialization
    """
    return [item.to_dict() for item in layout]


def deserialize_layout(
    data: Sequence[Any],
    *,
    validate: bool = True,
    strict: bool = False,
    context: str = "layout",
) -> List[GridItem]:
    """
    Deserialize a layout from wire dicts.

    Items without an id get their index as id, as unnamed items are
    matched by position.

    Args:
        data: List of dicts from JSON
        validate: Whether to run validate_layout first
        strict: Also validate against the JSON schema
        context: Label used in error messages

    Returns:
        List of GridItems

    Raises:
        ValidationError: If the data is invalid
    """
    if validate:
        validate_layout(data, context, strict=strict)

    items: List[GridItem] = []
    for index, entry in enumerate(data):
        if isinstance(entry, GridItem):
            items.append(entry)
            continue
        try:
            items.append(GridItem.from_dict(entry, default_id=str(index)))
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise ValidationError(
                f"{context}[{index}] could not be parsed: {e}",
                path=f"{context}[{index}]",
                index=index,
            ) from e
    return items


def layout_to_json(layout: Sequence[GridItem], *, indent: int | None = None) -> str:
    """Serialize a layout to a JSON string."""
    return json.dumps(serialize_layout(layout), indent=indent)


def layout_from_json(text: str, *, strict: bool = False) -> List[GridItem]:
    """
    Deserialize a layout from a JSON string.

    Raises:
        ValidationError: If the text is not JSON or the layout is invalid
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid layout JSON: {e}") from e
    return deserialize_layout(data, strict=strict)
