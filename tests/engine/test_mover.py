"""
Unit tests for move_element / resize_element.

The panel-jump scenarios check that moving one item never lets an
uninvolved neighbour leapfrog another.
"""

import random

import pytest

from grid_layout.core.models import CompactType, GridItem
from grid_layout.engine.compactor import compact
from grid_layout.engine.geometry import collides
from grid_layout.engine.mover import move_element, resize_element


def _positions(layout):
    return [(item.id, item.x, item.y) for item in layout]


def _moved(layout):
    return [item.moved for item in layout]


def _assert_no_movable_overlaps(layout):
    movable = [item for item in layout if not item.static]
    for i, first in enumerate(movable):
        for second in movable[i + 1:]:
            assert not collides(first, second), f"{first!r} overlaps {second!r}"


class TestMoveElement:
    """Tests for move_element()."""

    def test_move_when_prevent_collision_and_colliding_then_unchanged(self):
        layout = [GridItem("a", 0, 1, 1, 1), GridItem("b", 1, 2, 1, 1)]
        out = move_element(layout, layout[0], 1, 2, True, True)
        assert out == layout
        assert _moved(out) == [False, False]

    def test_move_when_colliding_in_rearrangement_mode_then_neighbour_pushed(self):
        layout = [GridItem("a", 0, 0, 1, 1), GridItem("b", 1, 0, 1, 1)]
        out = move_element(layout, layout[0], 1, 0, True, False, CompactType.VERTICAL, 2)
        assert _positions(out) == [("a", 1, 0), ("b", 1, 1)]
        assert _moved(out) == [True, True]

    def test_move_when_nudged_down_then_neighbour_swaps_above(self, column_stack):
        """B takes the free space above A; C must not jump above B."""
        out = move_element(column_stack, "A", 0, 1, True, False, CompactType.VERTICAL, 10)
        assert _positions(out) == [("A", 0, 1), ("B", 0, 0), ("C", 0, 11)]
        assert _moved(out) == [True, True, False]

    def test_move_when_large_item_moved_far_then_second_collision_pushed_below(self, column_stack):
        out = move_element(column_stack, "A", 0, 2, True, False, CompactType.VERTICAL, 10)
        assert _positions(out) == [("A", 0, 2), ("B", 0, 1), ("C", 0, 12)]
        assert _moved(out) == [True, True, True]

    def test_move_when_sideways_into_neighbour_then_chain_keeps_order(self):
        """Pushing B down must push the wide C below it, not above."""
        layout = [
            GridItem("A", 0, 0, 1, 1),
            GridItem("B", 1, 0, 1, 1),
            GridItem("C", 0, 1, 2, 2),
        ]
        out = move_element(layout, "A", 1, 0, True, False, CompactType.VERTICAL, 2)
        assert out == [
            GridItem("A", 1, 0, 1, 1),
            GridItem("B", 1, 1, 1, 1),
            GridItem("C", 0, 2, 2, 2),
        ]
        assert _moved(out) == [True, True, True]

    def test_move_when_horizontal_then_neighbour_swaps_left(self):
        layout = [
            GridItem("A", 0, 0, 10, 1),
            GridItem("B", 11, 0, 1, 1),
            GridItem("C", 12, 0, 1, 1),
        ]
        out = move_element(layout, "A", 2, 0, True, False, CompactType.HORIZONTAL, 20)
        assert _positions(out) == [("A", 2, 0), ("B", 1, 0), ("C", 12, 0)]
        assert _moved(out) == [True, True, False]

    def test_move_when_x_beyond_grid_then_clamped(self):
        layout = [GridItem("a", 0, 0, 2, 1)]
        out = move_element(layout, "a", 9, 0, cols=4)
        assert _positions(out) == [("a", 2, 0)]

    def test_move_when_negative_target_then_clamped_to_zero(self):
        layout = [GridItem("a", 2, 2, 1, 1)]
        assert _positions(move_element(layout, "a", -3, -1)) == [("a", 0, 0)]

    def test_move_when_axis_is_none_then_axis_kept(self):
        layout = [GridItem("a", 2, 2, 1, 1)]
        assert _positions(move_element(layout, "a", None, 5)) == [("a", 2, 5)]
        assert _positions(move_element(layout, "a", 0, None)) == [("a", 0, 2)]

    def test_move_when_static_item_then_unchanged(self):
        layout = [GridItem("s", 0, 0, 1, 1, static=True)]
        assert move_element(layout, "s", 3, 3) == layout

    def test_move_when_unknown_id_then_unchanged_copy(self):
        layout = [GridItem("a", 0, 0, 1, 1)]
        out = move_element(layout, "missing", 1, 1)
        assert out == layout
        assert out is not layout

    def test_move_when_target_is_current_position_then_unchanged(self):
        layout = [GridItem("a", 1, 1, 1, 1)]
        out = move_element(layout, "a", 1, 1)
        assert out == layout
        assert not out[0].moved

    def test_move_when_called_then_input_untouched(self, column_stack):
        move_element(column_stack, "A", 0, 2, True)
        assert _positions(column_stack) == [("A", 0, 0), ("B", 0, 10), ("C", 0, 11)]
        assert _moved(column_stack) == [False, False, False]

    def test_move_when_displaced_into_static_then_pushed_past_it(self):
        """A chain reaction skips over a static item instead of overlapping it."""
        layout = [
            GridItem("A", 0, 0, 1, 2),
            GridItem("B", 0, 2, 1, 1),
            GridItem("S", 0, 3, 1, 1, static=True),
            GridItem("C", 0, 4, 1, 1),
        ]
        out = move_element(layout, "A", 0, 1, False, False, CompactType.VERTICAL, 4)
        assert _positions(out) == [("A", 0, 1), ("B", 0, 4), ("S", 0, 3), ("C", 0, 5)]
        assert out[2] == layout[2]

    def test_move_when_user_drops_on_static_then_lands_before_it(self):
        layout = [GridItem("A", 0, 0, 1, 1), GridItem("S", 0, 2, 1, 1, static=True)]
        out = move_element(layout, "A", 0, 2, True, False, CompactType.VERTICAL, 4)
        assert _positions(out) == [("A", 0, 1), ("S", 0, 2)]

    def test_move_when_user_swaps_adjacent_items_then_positions_exchanged(self):
        layout = [
            GridItem("A", 0, 0, 1, 1),
            GridItem("B", 0, 1, 1, 1),
            GridItem("S", 0, 2, 1, 1, static=True),
        ]
        out = move_element(layout, "A", 0, 1, True, False, CompactType.VERTICAL, 4)
        assert _positions(out) == [("A", 0, 1), ("B", 0, 0), ("S", 0, 2)]

    def test_move_when_neighbour_overlaps_own_old_place_then_still_swaps_above(self):
        """The tall neighbour's own cells do not block the space above the mover."""
        layout = [GridItem("A", 0, 0, 1, 1), GridItem("B", 0, 1, 1, 2)]
        out = move_element(layout, "A", 0, 2, True, False, CompactType.VERTICAL, 4)
        assert _positions(out) == [("A", 0, 2), ("B", 0, 0)]

    def test_move_when_chain_lands_on_already_moved_item_then_no_overlap_left(self):
        """A displaced item resting on one moved earlier is pushed clear."""
        layout = [
            GridItem("0", 2, 0, 3, 3),
            GridItem("1", 2, 7, 4, 3),
            GridItem("2", 1, 3, 7, 4),
        ]
        out = move_element(layout, "1", 4, 2, True, False, CompactType.VERTICAL, 8)
        assert _positions(out)[1] == ("1", 4, 2)
        _assert_no_movable_overlaps(out)


class TestResizeElement:
    """Tests for resize_element()."""

    def test_resize_when_free_space_then_resized(self):
        layout = [GridItem("a", 0, 0, 1, 1)]
        out = resize_element(layout, "a", 3, 2)
        assert (out[0].w, out[0].h) == (3, 2)
        assert not out[0].moved

    def test_resize_when_colliding_then_neighbour_displaced(self):
        layout = [GridItem("a", 0, 0, 1, 1), GridItem("b", 1, 0, 1, 1)]
        out = resize_element(layout, "a", 2, 1, cols=4)
        assert out == [GridItem("a", 0, 0, 2, 1), GridItem("b", 1, 1, 1, 1)]
        assert _moved(out) == [False, True]

    def test_resize_when_prevent_collision_and_colliding_then_rejected(self):
        layout = [GridItem("a", 0, 0, 1, 1), GridItem("b", 1, 0, 1, 1)]
        assert resize_element(layout, "a", 2, 1, prevent_collision=True) == layout

    def test_resize_when_outside_item_bounds_then_clamped(self):
        layout = [GridItem("a", 0, 0, 2, 2, min_w=2, max_h=3)]
        out = resize_element(layout, "a", 1, 8)
        assert (out[0].w, out[0].h) == (2, 3)

    def test_resize_when_wider_than_remaining_columns_then_clamped(self):
        layout = [GridItem("a", 1, 0, 1, 1)]
        out = resize_element(layout, "a", 5, 1, cols=3)
        assert out[0].w == 2

    def test_resize_when_static_then_unchanged(self):
        layout = [GridItem("s", 0, 0, 1, 1, static=True)]
        assert resize_element(layout, "s", 2, 2) == layout

    def test_resize_when_unknown_id_then_unchanged(self):
        layout = [GridItem("a", 0, 0, 1, 1)]
        assert resize_element(layout, "nope", 2, 2) == layout


class TestMoveProperties:
    """Seeded random moves never leave overlapping non-static items."""

    @pytest.mark.parametrize(
        "compact_type",
        [CompactType.VERTICAL, CompactType.HORIZONTAL, CompactType.NONE],
    )
    @pytest.mark.parametrize("with_statics", [False, True])
    def test_move_when_random_moves_then_no_overlaps(self, compact_type, with_statics):
        rng = random.Random(2024)
        for _ in range(150):
            cols = rng.randint(2, 8)
            items = []
            for i in range(rng.randint(2, 8)):
                w = rng.randint(1, min(4, cols))
                static = with_statics and rng.random() < 0.2
                items.append(
                    GridItem(str(i), rng.randint(0, cols - w), rng.randint(0, 10), w, rng.randint(1, 4), static=static)
                )
            # Start from a settled layout, as the interaction layer does
            layout = compact(items, CompactType.VERTICAL, cols)
            target = rng.choice(layout)
            out = move_element(
                layout,
                target.id,
                rng.randint(0, cols - 1),
                rng.randint(0, 12),
                rng.random() < 0.5,
                False,
                compact_type,
                cols,
            )
            _assert_no_movable_overlaps(out)

    @pytest.mark.parametrize("compact_type", [CompactType.VERTICAL, CompactType.HORIZONTAL])
    def test_resize_when_random_resizes_then_no_overlaps(self, compact_type):
        rng = random.Random(77)
        for _ in range(150):
            cols = rng.randint(2, 8)
            items = [
                GridItem(str(i), rng.randint(0, cols - 1), rng.randint(0, 10), 1, rng.randint(1, 3))
                for i in range(rng.randint(2, 8))
            ]
            layout = compact(items, CompactType.VERTICAL, cols)
            target = rng.choice(layout)
            out = resize_element(layout, target.id, rng.randint(1, cols), rng.randint(1, 5), False, compact_type, cols)
            _assert_no_movable_overlaps(out)
