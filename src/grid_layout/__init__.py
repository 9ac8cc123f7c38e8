"""Top-level package for the grid layout engine.

Provides subpackages:
- grid_layout.core – GridItem/CompactType models, validation, serialization
- grid_layout.engine – compaction, movement, synchronization, controller
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text().splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.1.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("grid-layout-engine")
    except PackageNotFoundError:
        return "0.0.0"


from .core import CompactType, GridItem, UNBOUNDED, ValidationError, validate_layout
from .engine import (
    ConstraintViolation,
    GridConfig,
    GridLayoutController,
    InteractionResult,
    bottom,
    collides,
    compact,
    correct_bounds,
    get_all_collisions,
    get_first_collision,
    get_layout_item,
    move_element,
    resize_element,
    sort_layout_items_by_row_col,
    synchronize_layout_with_children,
)

__version__ = _get_version()
__all__: list[str] = [
    "__version__",
    "CompactType",
    "GridItem",
    "UNBOUNDED",
    "ValidationError",
    "validate_layout",
    "ConstraintViolation",
    "GridConfig",
    "GridLayoutController",
    "InteractionResult",
    "bottom",
    "collides",
    "compact",
    "correct_bounds",
    "get_all_collisions",
    "get_first_collision",
    "get_layout_item",
    "move_element",
    "resize_element",
    "sort_layout_items_by_row_col",
    "synchronize_layout_with_children",
]
