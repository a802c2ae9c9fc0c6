"""
Convenience constructors for shape trees.

These validate what the renderer takes for granted: grids are rectangular,
trees have children at least one line tall, padding is non-negative and text
entries hold no line breaks.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from box_types import Empty, Frame, Grid, GridStyle, Pad, Shape, Text, Tree
from layout import Layout, codepoint_length

__all__ = [
    "empty",
    "split_lines",
    "text",
    "lines",
    "frame",
    "pad",
    "grid",
    "hlist",
    "vlist",
    "tree",
]


def empty() -> Empty:
    return Empty()


def split_lines(s: str) -> tuple[str, ...]:
    """
    Split a string on line breaks.

    A trailing line break does not start an extra empty line, and the empty
    string has no lines at all.

    Example:
        split_lines("a\\n\\nb\\n") -> ("a", "", "b")
    """
    parts = s.split("\n")
    if parts[-1] == "":
        parts.pop()
    return tuple(parts)


def text(s: str) -> Text:
    """A text block; line breaks in `s` separate the lines."""
    return Text(split_lines(s))


def lines(entries: Iterable[str]) -> Text:
    """A text block from explicit lines."""
    result = tuple(entries)
    for i, line in enumerate(result):
        if "\n" in line:
            raise ValueError(
                f"Line {i} contains a line break: {line!r}\n"
                f"  Use text() to split a string into lines"
            )
    return Text(result)


def frame(inner: Shape) -> Frame:
    return Frame(inner)


def pad(inner: Shape, dx: int = 1, dy: int = 1) -> Pad:
    """Surround a shape with dx blank columns left/right and dy blank rows above/below."""
    if dx < 0 or dy < 0:
        raise ValueError(f"Padding must be non-negative, got dx={dx}, dy={dy}")
    return Pad(dx, dy, inner)


def grid(rows: Sequence[Sequence[Shape]], bars: bool = True) -> Grid:
    """
    A table of shapes.

    Args:
        rows: Matrix of shapes, one sequence per row; all rows the same length
        bars: Draw separators between cells

    Returns:
        The grid shape
    """
    cells = tuple(tuple(row) for row in rows)

    if cells:
        cols = len(cells[0])
        mismatched = [(i, len(row)) for i, row in enumerate(cells) if len(row) != cols]
        if mismatched:
            error_msg = (
                f"Inconsistent row lengths in grid\n"
                f"  Expected: {cols} columns (from row 0)\n"
                f"  Mismatched rows:\n"
            )
            for row_idx, actual_cols in mismatched:
                error_msg += f"    Row {row_idx}: {actual_cols} columns\n"
            error_msg += "  All rows must have the same number of cells"
            raise ValueError(error_msg)

    style = GridStyle.BARS if bars else GridStyle.NONE
    return Grid(style, cells)


def hlist(items: Sequence[Shape], bars: bool = True) -> Grid:
    """Shapes side by side, as a one-row grid."""
    return grid([items], bars=bars)


def vlist(items: Sequence[Shape], bars: bool = True) -> Grid:
    """Shapes stacked vertically, as a one-column grid."""
    return grid([[item] for item in items], bars=bars)


def tree(node: Shape, children: Sequence[Shape], indent: int = 1) -> Tree:
    """A node with children drawn below it, indented by `indent` columns."""
    if not children:
        raise ValueError("A tree needs at least one child; use the node itself for a leaf")
    if indent < 1:
        raise ValueError(
            f"Tree indent must be at least 1, got {indent}\n"
            f"  The connector glyph is drawn one column left of the children"
        )
    # Heights never depend on the width function
    layout = Layout(codepoint_length)
    flat = [i for i, child in enumerate(children) if layout.size(child).y == 0]
    if flat:
        raise ValueError(
            f"Tree children must be at least one line tall\n"
            f"  Zero-height children at positions: {flat}\n"
            f"  Each child gets a connector line; use text(' ') for a blank child"
        )
    return Tree(indent, node, tuple(children))
