"""
Core Models Package

Immutable data models shared by every engine module.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation of a caller's layout by an engine operation
2. Safe to pass between threads
3. Layouts compare by value (the transient `moved` flag is excluded)
"""

from .compact_type import CompactType
from .item import GridItem, UNBOUNDED

__all__ = [
    "CompactType",
    "GridItem",
    "UNBOUNDED",
]
