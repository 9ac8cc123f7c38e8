"""
Grid Layout Core Package

Shared data models, validation and serialization used by the engine.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Items are frozen dataclasses; every engine operation returns new
     items and a new list, the caller's layout is never touched

2. **Explicit Optional Bounds**
   - Absent max_w / max_h are the UNBOUNDED sentinel, not missing keys

3. **Validation at the Boundary**
   - Layouts from outside the engine go through validate_layout(), which
     names the exact index and field of bad input
"""

from .models import CompactType, GridItem, UNBOUNDED
from .schemas import ValidationError, validate_layout

__all__ = [
    "CompactType",
    "GridItem",
    "UNBOUNDED",
    "ValidationError",
    "validate_layout",
]
