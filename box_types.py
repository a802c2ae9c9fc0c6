"""
Shared type definitions for the textbox system.

Positions are (x, y) with x the column and y the row. Sizes reuse the same
type, with x the width and y the height.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering


# =============================================================================
# Geometry
# =============================================================================


@total_ordering
@dataclass(frozen=True)
class Position:
    """A point (or extent) on the character plane, ordered row-major."""

    x: int
    y: int

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.y, self.x)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __add__(self, other: Position) -> Position:
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Position) -> Position:
        return Position(self.x - other.x, self.y - other.y)

    def move(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)

    def move_x(self, dx: int) -> Position:
        return Position(self.x + dx, self.y)

    def move_y(self, dy: int) -> Position:
        return Position(self.x, self.y + dy)


ORIGIN = Position(0, 0)


# =============================================================================
# Shapes
# =============================================================================


class GridStyle(Enum):
    """How grid cells are separated."""

    BARS = "bars"  # Draw +, - and | between cells
    NONE = "none"  # Cells touch directly


@dataclass(frozen=True)
class Empty:
    """A zero-size placeholder."""

    pass


@dataclass(frozen=True)
class Text:
    """A block of lines. No entry contains a line break."""

    lines: tuple[str, ...]


@dataclass(frozen=True)
class Frame:
    """A one-cell border around another shape."""

    inner: Shape


@dataclass(frozen=True)
class Pad:
    """Blank margin of dx columns left/right and dy rows above/below."""

    dx: int
    dy: int
    inner: Shape


@dataclass(frozen=True)
class Grid:
    """A rectangular matrix of shapes, rendered as a table."""

    style: GridStyle
    cells: tuple[tuple[Shape, ...], ...]

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0


@dataclass(frozen=True)
class Tree:
    """A node with children hanging below it, joined by connector glyphs."""

    indent: int
    node: Shape
    children: tuple[Shape, ...]


Shape = Empty | Text | Frame | Pad | Grid | Tree
