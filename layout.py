"""
Size computation for shape trees.

A Layout derives every shape's bounding box bottom-up and remembers it, so a
node's size is computed at most once no matter how many ancestors ask for it.
The display width of a string is delegated to an injected width function.
"""

from __future__ import annotations

import logging
from typing import Callable

from wcwidth import wcswidth, wcwidth

from box_types import (
    ORIGIN,
    Empty,
    Frame,
    Grid,
    GridStyle,
    Pad,
    Position,
    Shape,
    Text,
    Tree,
)

logger = logging.getLogger(__name__)

WidthFn = Callable[[str], int]


# =============================================================================
# Width Functions
# =============================================================================


def byte_length(s: str) -> int:
    """Width as the length of the UTF-8 encoding."""
    return len(s.encode("utf-8"))


def codepoint_length(s: str) -> int:
    """Width as the number of code points."""
    return len(s)


def display_width(s: str) -> int:
    """Width in terminal columns; wide characters count double."""
    width = wcswidth(s)
    if width >= 0:
        return width
    # wcswidth gives up on control characters, count them as zero columns
    return sum(max(wcwidth(ch), 0) for ch in s)


WIDTH_FUNCTIONS: dict[str, WidthFn] = {
    "bytes": byte_length,
    "chars": codepoint_length,
    "display": display_width,
}


# =============================================================================
# Layout
# =============================================================================


class Layout:
    """Memoized size calculator bound to one width function."""

    def __init__(self, width_fn: WidthFn = byte_length) -> None:
        self.width_fn = width_fn
        # Keyed by id(); the shape is stored too so the id stays valid
        self._sizes: dict[int, tuple[Shape, Position]] = {}
        self._offsets: dict[int, tuple[Grid, list[int], list[int]]] = {}

    def size(self, shape: Shape) -> Position:
        """Return the (width, height) of a shape."""
        entry = self._sizes.get(id(shape))
        if entry is not None:
            return entry[1]
        result = self._compute_size(shape)
        self._sizes[id(shape)] = (shape, result)
        return result

    def grid_offsets(self, grid: Grid) -> tuple[list[int], list[int]]:
        """
        Compute start offsets of every column and row of a grid.

        Both lists have one more slot than there are columns (rows), holding
        the end position. With bars, one unit is left between neighbours for
        the separator, but none after the last column or row.

        Returns:
            Tuple of (columns, lines)
        """
        entry = self._offsets.get(id(grid))
        if entry is not None:
            return entry[1], entry[2]

        extra = 1 if grid.style is GridStyle.BARS else 0
        rows, cols = grid.rows, grid.cols

        columns = [0] * (cols + 1)
        for i in range(cols):
            width = max(self.size(row[i]).x for row in grid.cells)
            columns[i + 1] = columns[i] + width + extra

        lines = [0] * (rows + 1)
        for j in range(rows):
            height = max((self.size(cell).y for cell in grid.cells[j]), default=0)
            lines[j + 1] = lines[j] + height + extra

        # No trailing bars
        if cols > 0:
            columns[cols] -= extra
        if rows > 0:
            lines[rows] -= extra

        self._offsets[id(grid)] = (grid, columns, lines)
        return columns, lines

    def _compute_size(self, shape: Shape) -> Position:
        match shape:
            case Empty():
                return ORIGIN

            case Text(lines=lines):
                width = max((self.width_fn(line) for line in lines), default=0)
                return Position(width, len(lines))

            case Frame(inner=inner):
                return self.size(inner).move(2, 2)

            case Pad(dx=dx, dy=dy, inner=inner):
                return self.size(inner).move(2 * dx, 2 * dy)

            case Grid():
                if grid_is_degenerate(shape):
                    return ORIGIN
                columns, lines = self.grid_offsets(shape)
                size = Position(columns[shape.cols], lines[shape.rows])
                logger.debug("grid %dx%d sized %s", shape.rows, shape.cols, size)
                return size

            case Tree(indent=indent, node=node, children=children):
                node_size = self.size(node)
                child_sizes = [self.size(child) for child in children]
                children_width = max((s.x for s in child_sizes), default=0)
                children_height = sum(s.y for s in child_sizes)
                return Position(
                    max(node_size.x, children_width + indent + 3),
                    node_size.y + children_height,
                )

        raise TypeError(f"Not a shape: {shape!r}")


def grid_is_degenerate(grid: Grid) -> bool:
    """A grid without rows or without columns occupies no space."""
    return grid.rows == 0 or grid.cols == 0
