"""
Render shape trees to fixed-width text.
Three phases: layout (sizes, memoized) -> paint (sparse canvas) -> serialize.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

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
from canvas import Canvas, TextSink
from layout import Layout, WidthFn, byte_length, grid_is_degenerate

logger = logging.getLogger(__name__)

TREE_CONNECTOR = "+- "


@dataclass(frozen=True)
class RenderOptions:
    """Settings for one render."""

    indent: int = 0  # Left margin added to every output line
    width_fn: WidthFn = byte_length


# =============================================================================
# Painting
# =============================================================================


def write_vline(canvas: Canvas, pos: Position, n: int) -> None:
    for j in range(n):
        canvas.put_char(pos.move_y(j), "|")


def write_hline(canvas: Canvas, pos: Position, n: int) -> None:
    for i in range(n):
        canvas.put_char(pos.move_x(i), "-")


def render_rec(
    shape: Shape,
    canvas: Canvas,
    layout: Layout,
    pos: Position,
    offset: Position = ORIGIN,
    expected_size: Position | None = None,
) -> None:
    """
    Paint a shape onto the canvas with its upper left corner at `pos`.

    Args:
        shape: The shape to paint
        canvas: Destination canvas
        layout: Size calculator shared by the whole tree
        pos: Upper left corner of the shape
        offset: Displacement accumulated through directly enclosing pads, so
            grid rules can reach back to the outermost padded edge
        expected_size: Space the parent allotted to this shape; grid rules
            are drawn across all of it
    """
    match shape:
        case Empty():
            pass

        case Text(lines=lines):
            for i, line in enumerate(lines):
                canvas.put_string(pos.move_y(i), line)

        case Frame(inner=inner):
            size = layout.size(inner)
            x, y = size.x, size.y
            canvas.put_char(pos, "+")
            canvas.put_char(pos.move(x + 1, y + 1), "+")
            canvas.put_char(pos.move(0, y + 1), "+")
            canvas.put_char(pos.move(x + 1, 0), "+")
            write_hline(canvas, pos.move_x(1), x)
            write_hline(canvas, pos.move(1, y + 1), x)
            write_vline(canvas, pos.move_y(1), y)
            write_vline(canvas, pos.move(x + 1, 1), y)
            render_rec(inner, canvas, layout, pos.move(1, 1))

        case Pad(dx=dx, dy=dy, inner=inner):
            render_rec(
                inner,
                canvas,
                layout,
                pos.move(dx, dy),
                offset=offset.move(dx, dy),
                expected_size=layout.size(shape),
            )

        case Grid():
            if grid_is_degenerate(shape):
                return
            _render_grid(shape, canvas, layout, pos, offset, expected_size)

        case Tree(indent=indent, node=node, children=children):
            render_rec(node, canvas, layout, pos)
            # Start position for the children
            cursor = pos.move(indent, layout.size(node).y)
            canvas.put_char(cursor.move_x(-1), "`")
            last = len(children) - 1
            for i, child in enumerate(children):
                child_height = layout.size(child).y
                canvas.put_string(cursor, TREE_CONNECTOR)
                if i < last:
                    write_vline(canvas, cursor.move_y(1), child_height - 1)
                render_rec(child, canvas, layout, cursor.move_x(len(TREE_CONNECTOR)))
                cursor = cursor.move_y(child_height)


def _render_grid(
    grid: Grid,
    canvas: Canvas,
    layout: Layout,
    pos: Position,
    offset: Position,
    expected_size: Position | None,
) -> None:
    """Paint grid cells, then the separating rules if the grid has bars."""
    columns, lines = layout.grid_offsets(grid)
    rows, cols = grid.rows, grid.cols

    for j, row in enumerate(grid.cells):
        for i, cell in enumerate(row):
            cell_size = Position(columns[i + 1] - columns[i], lines[j + 1] - lines[j])
            render_rec(
                cell,
                canvas,
                layout,
                pos.move(columns[i], lines[j]),
                expected_size=cell_size,
            )

    if grid.style is not GridStyle.BARS:
        return

    if expected_size is None:
        len_hlines, len_vlines = columns[cols], lines[rows]
    else:
        len_hlines, len_vlines = expected_size.x, expected_size.y

    for j in range(1, rows):
        write_hline(canvas, pos.move(-offset.x, lines[j] - 1), len_hlines)
    for i in range(1, cols):
        write_vline(canvas, pos.move(columns[i] - 1, -offset.y), len_vlines)
    for j in range(1, rows):
        for i in range(1, cols):
            canvas.put_char(pos.move(columns[i] - 1, lines[j] - 1), "+")


# =============================================================================
# Entry Points
# =============================================================================


def render(shape: Shape, options: RenderOptions | None = None) -> Canvas:
    """
    Paint a shape tree onto a fresh canvas, upper left corner at the origin.

    Args:
        shape: Root of the shape tree
        options: Render settings (default RenderOptions())

    Returns:
        The populated canvas, ready to serialize
    """
    options = options or RenderOptions()
    layout = Layout(options.width_fn)
    canvas = Canvas(options.width_fn)
    render_rec(shape, canvas, layout, ORIGIN)
    size = layout.size(shape)
    logger.info(
        "render: width=%d, height=%d, atoms=%d",
        size.x,
        size.y,
        len(canvas),
    )
    return canvas


def to_string(shape: Shape, options: RenderOptions | None = None) -> str:
    """Render a shape tree to a string."""
    options = options or RenderOptions()
    return render(shape, options).to_string(options.indent)


def output(
    shape: Shape,
    sink: TextSink | None = None,
    options: RenderOptions | None = None,
) -> None:
    """Render a shape tree into a text sink (default stdout) and flush it."""
    options = options or RenderOptions()
    if sink is None:
        sink = sys.stdout
    render(shape, options).write_to(sink, options.indent)
    flush = getattr(sink, "flush", None)
    if flush is not None:
        flush()
