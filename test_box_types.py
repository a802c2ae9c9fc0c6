"""Tests for positions and shape data structures."""

from box_types import ORIGIN, Grid, GridStyle, Position, Text


class TestPosition:
    """Tests for position arithmetic and ordering."""

    def test_move(self) -> None:
        assert Position(1, 2).move(3, -4) == Position(4, -2)
        assert Position(1, 2).move_x(5) == Position(6, 2)
        assert Position(1, 2).move_y(5) == Position(1, 7)

    def test_add_and_subtract(self) -> None:
        assert Position(1, 2) + Position(10, 20) == Position(11, 22)
        assert Position(1, 2) - Position(1, 2) == ORIGIN

    def test_row_major_order(self) -> None:
        """Rows compare first, columns break ties."""
        assert Position(99, 0) < Position(0, 1)
        assert Position(1, 3) < Position(2, 3)
        assert Position(2, 3) >= Position(2, 3)
        assert sorted([Position(0, 1), Position(5, 0), Position(1, 0)]) == [
            Position(1, 0),
            Position(5, 0),
            Position(0, 1),
        ]

    def test_hashable(self) -> None:
        assert {Position(1, 1): "a"}[Position(1, 1)] == "a"


class TestShapes:
    """Tests for shape containers."""

    def test_grid_dimensions(self) -> None:
        g = Grid(GridStyle.BARS, ((Text(("a",)), Text(("b",))),))
        assert g.rows == 1
        assert g.cols == 2

    def test_empty_grid_dimensions(self) -> None:
        g = Grid(GridStyle.NONE, ())
        assert g.rows == 0
        assert g.cols == 0

    def test_shapes_compare_by_value(self) -> None:
        assert Text(("a", "b")) == Text(("a", "b"))
