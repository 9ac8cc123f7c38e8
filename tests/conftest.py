import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import grid_layout
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from grid_layout.core.models import GridItem


# Common test fixtures
@pytest.fixture
def make_item():
    """Factory for GridItems with positional geometry."""
    def _create(item_id: str, x: int, y: int, w: int = 1, h: int = 1, **options) -> GridItem:
        return GridItem(item_id, x=x, y=y, w=w, h=h, **options)
    return _create


@pytest.fixture
def column_stack(make_item):
    """A(h=10) at y=0, B at y=10, C at y=11, all in column 0."""
    return [
        make_item("A", 0, 0, 1, 10),
        make_item("B", 0, 10),
        make_item("C", 0, 11),
    ]
