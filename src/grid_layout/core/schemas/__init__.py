"""
Schemas Package

JSON schema definition and validation utilities for externally supplied
layouts.
"""

from .validator import (
    validate_layout,
    ValidationError,
    GEOMETRY_FIELDS,
)

__all__ = [
    "validate_layout",
    "ValidationError",
    "GEOMETRY_FIELDS",
]
