"""
Core Utilities Package

Serialization helpers for layouts.
"""

from .serialization import (
    serialize_layout,
    deserialize_layout,
    layout_to_json,
    layout_from_json,
)

__all__ = [
    "serialize_layout",
    "deserialize_layout",
    "layout_to_json",
    "layout_from_json",
]
