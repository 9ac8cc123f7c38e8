"""
Unit tests for geometry primitives.
"""

import pytest

from grid_layout.core.models import GridItem
from grid_layout.engine.geometry import (
    ConstraintViolation,
    assert_no_overlaps,
    collides,
    correct_bounds,
)


class TestCollides:
    """Tests for collides()."""

    def test_collides_when_diagonal_neighbours_then_false(self):
        assert collides(GridItem("a", 0, 1, 1, 1), GridItem("b", 1, 2, 1, 1)) is False

    def test_collides_when_same_rectangle_then_true(self):
        assert collides(GridItem("a", 0, 1, 1, 1), GridItem("b", 0, 1, 1, 1)) is True

    def test_collides_when_sharing_an_edge_then_false(self):
        """Touching edges have zero-area intersection."""
        left = GridItem("a", 0, 0, 2, 2)
        assert collides(left, GridItem("b", 2, 0, 2, 2)) is False
        assert collides(left, GridItem("c", 0, 2, 2, 2)) is False

    def test_collides_when_partial_overlap_then_symmetric(self):
        a = GridItem("a", 0, 0, 3, 3)
        b = GridItem("b", 2, 2, 3, 3)
        assert collides(a, b) is True
        assert collides(b, a) is True

    def test_collides_when_same_id_then_still_compares_geometry(self):
        """Ids play no part in the test."""
        assert collides(GridItem("a", 0, 0, 1, 1), GridItem("a", 5, 5, 1, 1)) is False
        assert collides(GridItem("a", 0, 0, 1, 1), GridItem("a", 0, 0, 1, 1)) is True


class TestCorrectBounds:
    """Tests for correct_bounds()."""

    def test_correct_bounds_when_overflowing_right_then_shifted_left(self):
        out = correct_bounds([GridItem("a", 9, 0, 3, 1)], cols=10)
        assert (out[0].x, out[0].w) == (7, 3)

    def test_correct_bounds_when_wider_than_grid_then_width_clamped(self):
        out = correct_bounds([GridItem("a", 2, 0, 15, 1)], cols=10)
        assert (out[0].x, out[0].w) == (0, 10)

    def test_correct_bounds_when_items_overlap_then_left_alone(self):
        """Only grid bounds are repaired, not inter-item overlap."""
        layout = [GridItem("a", 0, 0, 2, 2), GridItem("b", 1, 1, 2, 2)]
        assert correct_bounds(layout, cols=4) == layout

    def test_correct_bounds_when_called_then_input_untouched(self):
        layout = [GridItem("a", 9, 0, 3, 1)]
        correct_bounds(layout, cols=4)
        assert layout[0].x == 9


class TestAssertNoOverlaps:
    """Tests for the invariant check."""

    def test_assert_when_disjoint_then_passes(self):
        assert_no_overlaps([GridItem("a", 0, 0, 1, 1), GridItem("b", 1, 0, 1, 1)])

    def test_assert_when_static_overlaps_then_passes(self):
        """Only non-static pairs count."""
        assert_no_overlaps([GridItem("a", 0, 0, 2, 2), GridItem("s", 1, 1, 1, 1, static=True)])

    def test_assert_when_movable_items_overlap_then_raises(self):
        with pytest.raises(ConstraintViolation, match="overlaps") as excinfo:
            assert_no_overlaps([GridItem("a", 0, 0, 2, 2), GridItem("b", 1, 1, 1, 1)], "test")
        assert excinfo.value.first.id == "a"
        assert excinfo.value.second.id == "b"
