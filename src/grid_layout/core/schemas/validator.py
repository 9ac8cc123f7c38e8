"""
Layout Validation Utilities

Validates layouts handed to the engine from outside (wire dicts or
GridItems) before any operation touches them.

**DESIGN:**

- Basic checks always run and name the exact index and field, e.g.
  "Layout[1].h must be a number!", so callers can localize bad input.
- `strict=True` additionally checks the wire format against
  `layout.schema.json` with jsonschema.
- Fail fast: the whole layout is rejected, missing fields are never guessed.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence


# Numeric geometry fields every item must carry
GEOMETRY_FIELDS = ("x", "y", "w", "h")

# Optional resize bounds; a max may also be infinite (unbounded)
BOUND_FIELDS = ("minW", "maxW", "minH", "maxH")

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _get_jsonschema():
    """Import jsonschema lazily."""
    import jsonschema
    return jsonschema


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when a layout fails validation."""

    def __init__(
        self,
        message: str,
        path: str = "",
        errors: list[str] | None = None,
        *,
        index: Optional[int] = None,
        field: Optional[str] = None,
    ):
        super().__init__(message)
        self.path = path
        self.errors = errors or []
        self.index = index
        self.field = field


def _get(item: Any, name: str) -> Any:
    """Read a field from a wire dict or a GridItem."""
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _item_id(item: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get("i", item.get("id"))
    return getattr(item, "id", None)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integral(value: Any) -> bool:
    """Whole number check for values that already passed _is_number (rejects inf and nan)."""
    return isinstance(value, int) or value.is_integer()


def validate_layout(
    layout: Sequence[Any],
    context: str = "Layout",
    *,
    require_id: bool = False,
    strict: bool = False,
) -> None:
    """
    Validate a layout supplied from outside the engine.

    Args:
        layout: Sequence of wire dicts or GridItems
        context: Label used in error messages (e.g. "layout", "children")
        require_id: If True, every item must carry a string id
        strict: If True, also validate the wire format with jsonschema

    Raises:
        ValidationError: On the first invalid item. `index` and `field`
            identify the offending entry.

    Example:
        >>> validate_layout([{"x": 0, "y": 1, "w": 1}])
        Traceback (most recent call last):
        ...
        ValidationError: Layout[0].h must be a number!
    """
    if not isinstance(layout, (list, tuple)):
        raise ValidationError(f"{context} must be an array!", path=context)

    seen: dict[str, int] = {}
    for index, item in enumerate(layout):
        path = f"{context}[{index}]"
        for name in GEOMETRY_FIELDS:
            if not _is_number(_get(item, name)):
                raise ValidationError(
                    f"{path}.{name} must be a number!",
                    path=f"{path}.{name}",
                    index=index,
                    field=name,
                )
            if not _is_integral(_get(item, name)):
                raise ValidationError(
                    f"{path}.{name} must be an integer!",
                    path=f"{path}.{name}",
                    index=index,
                    field=name,
                )

        if isinstance(item, Mapping):
            for name in BOUND_FIELDS:
                value = item.get(name)
                if value is None:
                    continue
                unbounded = name.startswith("max") and value == math.inf
                if not _is_number(value) or not (unbounded or _is_integral(value)):
                    raise ValidationError(
                        f"{path}.{name} must be an integer!",
                        path=f"{path}.{name}",
                        index=index,
                        field=name,
                    )

        item_id = _item_id(item)
        if (item_id is not None or require_id) and not isinstance(item_id, str):
            raise ValidationError(
                f"{path}.i must be a string!",
                path=f"{path}.i",
                index=index,
                field="i",
            )

        is_static = _get(item, "static")
        if is_static is not None and not isinstance(is_static, bool):
            raise ValidationError(
                f"{path}.static must be a boolean!",
                path=f"{path}.static",
                index=index,
                field="static",
            )

        if item_id is not None:
            if item_id in seen:
                raise ValidationError(
                    f'Duplicate id "{item_id}" found in {path} '
                    f"(first seen at {context}[{seen[item_id]}])",
                    path=f"{path}.i",
                    index=index,
                    field="i",
                )
            seen[item_id] = index

    # Full schema validation only applies to the wire format
    if strict and all(isinstance(item, Mapping) for item in layout):
        jsonschema = _get_jsonschema()
        schema = _load_schema("layout")
        try:
            jsonschema.validate(list(layout), schema)
        except jsonschema.ValidationError as e:
            path_parts = list(e.absolute_path)
            index = path_parts[0] if path_parts and isinstance(path_parts[0], int) else None
            field = str(path_parts[1]) if len(path_parts) > 1 else None
            raise ValidationError(
                f"Schema validation failed for {context}: {e.message}",
                path=".".join(str(p) for p in path_parts),
                errors=[e.message],
                index=index,
                field=field,
            ) from e
