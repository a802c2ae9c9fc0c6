"""
Build shape trees from nested JSON-like data.

Format:
- null: Empty
- "string": Text, split on line breaks
- {"text": "a\\nb"} or {"text": ["a", "b"]}: Text
- {"frame": BOX}: Frame
- {"pad": BOX, "dx": 1, "dy": 1}: Pad (dx and dy default to 1)
- {"grid": [[BOX, ...], ...], "bars": true}: Grid (bars defaults to true)
- {"tree": BOX, "children": [BOX, ...], "indent": 1}: Tree (indent defaults to 1)

Example:
    {"frame": {"grid": [["name", "size"], ["a.txt", "12"]]}}
"""

from __future__ import annotations

import json
import logging
from typing import Any

import box_builder
from box_types import Shape

__all__ = ["BoxParseError", "parse_box", "parse_box_json"]

logger = logging.getLogger(__name__)

KINDS = ("text", "frame", "pad", "grid", "tree")

ALLOWED_KEYS: dict[str, set[str]] = {
    "text": {"text"},
    "frame": {"frame"},
    "pad": {"pad", "dx", "dy"},
    "grid": {"grid", "bars"},
    "tree": {"tree", "children", "indent"},
}


class BoxParseError(ValueError):
    """A malformed description, with the location of the offending node."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


def parse_box(data: Any, path: str = "$") -> Shape:
    """
    Parse one box description.

    Args:
        data: Decoded description (see module docstring)
        path: Location of `data` inside the document, used in error messages

    Returns:
        The shape tree

    Raises:
        BoxParseError: if the description is malformed
    """
    if data is None:
        return box_builder.empty()
    if isinstance(data, str):
        return box_builder.text(data)
    if not isinstance(data, dict):
        raise BoxParseError(
            f"Invalid box at {path}: {data!r}\n"
            f"  Expected null, a string or an object with one of the keys: "
            f"{', '.join(KINDS)}",
            path,
        )

    kinds = [k for k in KINDS if k in data]
    if len(kinds) != 1:
        raise BoxParseError(
            f"Invalid box at {path}: keys {sorted(data)}\n"
            f"  Expected exactly one of: {', '.join(KINDS)}",
            path,
        )
    kind = kinds[0]
    unknown = set(data) - ALLOWED_KEYS[kind]
    if unknown:
        raise BoxParseError(f"Unknown keys for {kind} at {path}: {sorted(unknown)}", path)

    logger.debug("parse_box: %s at %s", kind, path)
    try:
        match kind:
            case "text":
                content = data["text"]
                if isinstance(content, str):
                    return box_builder.text(content)
                if isinstance(content, list) and all(isinstance(s, str) for s in content):
                    return box_builder.lines(content)
                raise ValueError(f"text must be a string or a list of strings, got {content!r}")

            case "frame":
                return box_builder.frame(parse_box(data["frame"], f"{path}.frame"))

            case "pad":
                inner = parse_box(data["pad"], f"{path}.pad")
                dx = _int_field(data, "dx", 1)
                dy = _int_field(data, "dy", 1)
                return box_builder.pad(inner, dx=dx, dy=dy)

            case "grid":
                rows = data["grid"]
                if not isinstance(rows, list) or not all(isinstance(r, list) for r in rows):
                    raise ValueError(f"grid must be a list of rows, got {rows!r}")
                bars = data.get("bars", True)
                if not isinstance(bars, bool):
                    raise ValueError(f"bars must be true or false, got {bars!r}")
                cells = [
                    [parse_box(cell, f"{path}.grid[{j}][{i}]") for i, cell in enumerate(row)]
                    for j, row in enumerate(rows)
                ]
                return box_builder.grid(cells, bars=bars)

            case "tree":
                node = parse_box(data["tree"], f"{path}.tree")
                children = data.get("children", [])
                if not isinstance(children, list):
                    raise ValueError(f"children must be a list, got {children!r}")
                parsed = [
                    parse_box(child, f"{path}.children[{i}]")
                    for i, child in enumerate(children)
                ]
                indent = _int_field(data, "indent", 1)
                return box_builder.tree(node, parsed, indent=indent)

    except BoxParseError:
        # Already located deeper in the document
        raise
    except ValueError as e:
        raise BoxParseError(f"In {kind} at {path}: {e}", path) from e

    raise AssertionError(f"unhandled kind {kind}")


def _int_field(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    # bool is an int subclass but never a sensible size
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def parse_box_json(source: str) -> Shape:
    """Parse a box description from JSON text."""
    try:
        data = json.loads(source)
    except json.JSONDecodeError as e:
        raise BoxParseError(f"Invalid JSON: {e}", "$") from e
    return parse_box(data)
