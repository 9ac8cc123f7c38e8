"""
Module: compact_type

Purpose:
    Provides the CompactType enum - the direction in which a layout is
    packed. Passed into every engine operation, never stored in a layout.

Dependencies:
    - enum (std)

Used By:
    - engine.accessors (processing order)
    - engine.compactor
    - engine.mover
    - engine.config.GridConfig
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class CompactType(str, Enum):
    """Direction in which items are packed."""
    VERTICAL = "vertical"      # Items float up (y -> 0)
    HORIZONTAL = "horizontal"  # Items float left (x -> 0)
    NONE = "none"              # No packing; items stay where they are put

    def __str__(self) -> str:
        return self.value

    @property
    def axis(self) -> str:
        """Coordinate moved by compaction ("x" or "y"). NONE uses "y"."""
        return "x" if self is CompactType.HORIZONTAL else "y"

    @classmethod
    def coerce(cls, value: Optional[Union["CompactType", str]]) -> "CompactType":
        """
        Convert a user supplied value into a CompactType.

        Args:
            value: Enum member, its string value, or None (no compaction)

        Returns:
            Matching CompactType

        Raises:
            ValueError: If the string is not a known compaction type
        """
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown compact type: {value!r}") from None
