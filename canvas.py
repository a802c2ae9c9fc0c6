"""
Sparse character canvas.

The canvas maps the leftmost position of each painted atom (a single character
or a one-line string fragment) to that atom. Instead of filling a dense
buffer, serialization replays the atoms in row-major order and rebuilds line
breaks and blank runs from the distance between consecutive atoms.
"""

from __future__ import annotations

from typing import Iterator, Protocol

from box_types import ORIGIN, Position
from layout import WidthFn, byte_length


class CanvasOrderError(AssertionError):
    """An atom starts before the end of the previous one: two shapes overlap."""


class TextSink(Protocol):
    def write(self, s: str, /) -> object: ...


class Canvas:
    """Mapping from position to painted atom, serialized exactly once."""

    def __init__(self, width_fn: WidthFn = byte_length) -> None:
        self.width_fn = width_fn
        self._atoms: dict[Position, str] = {}
        # Positions holding string fragments (as opposed to single chars)
        self._fragments: set[Position] = set()

    def __len__(self) -> int:
        return len(self._atoms)

    def put_char(self, pos: Position, ch: str) -> None:
        if len(ch) != 1 or ch == "\n":
            raise ValueError(f"Expected a single non-newline character, got {ch!r}")
        self._atoms[pos] = ch
        self._fragments.discard(pos)

    def put_string(self, pos: Position, s: str) -> None:
        if "\n" in s:
            raise ValueError(f"String fragment must not contain a line break: {s!r}")
        self._atoms[pos] = s
        self._fragments.add(pos)

    def atoms(self) -> Iterator[tuple[Position, str]]:
        """Yield (position, atom) pairs in row-major order."""
        for pos in sorted(self._atoms, key=lambda p: p.sort_key):
            yield pos, self._atoms[pos]

    def atom_width(self, pos: Position) -> int:
        if pos in self._fragments:
            return self.width_fn(self._atoms[pos])
        return 1

    def iter_chunks(self, indent: int = 0) -> Iterator[str]:
        """
        Yield the serialized text piece by piece.

        The cursor starts at the origin, after `indent` leading spaces. Every
        new line also starts with `indent` spaces, except lines that hold no
        atom at all, which stay empty.

        Raises:
            CanvasOrderError: if an atom starts before the cursor
        """
        margin = " " * indent
        yield margin
        cursor = ORIGIN
        for pos, atom in self.atoms():
            if pos < cursor:
                raise CanvasOrderError(
                    f"Atom {atom!r} at (x={pos.x}, y={pos.y}) starts before "
                    f"the cursor at (x={cursor.x}, y={cursor.y})"
                )
            x_start = cursor.x
            if cursor.y < pos.y:
                yield "\n" * (pos.y - cursor.y) + margin
                x_start = 0
            if pos.x > x_start:
                yield " " * (pos.x - x_start)
            yield atom
            cursor = Position(pos.x + self.atom_width(pos), pos.y)

    def to_string(self, indent: int = 0) -> str:
        return "".join(self.iter_chunks(indent))

    def write_to(self, sink: TextSink, indent: int = 0) -> None:
        for chunk in self.iter_chunks(indent):
            if chunk:
                sink.write(chunk)
