"""
Demonstration scripts for the textbox renderer.

Usage:
    python demo.py                  # render every built-in layout
    python demo.py table            # render one built-in layout
    python demo.py layout.json      # render a box description from a file
    python demo.py table --indent 4 --width display --verbose
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

from box_parser import parse_box, parse_box_json
from box_types import Shape
from layout import WIDTH_FUNCTIONS
from textbox import RenderOptions, to_string

LAYOUTS: dict[str, Any] = dict(
    hello={"frame": "hello\nworld"},
    table={
        "frame": {
            "grid": [
                ["name", "size", "kind"],
                ["README", "1204", "text"],
                ["logo.png", "88310", "image"],
            ]
        }
    },
    padded={"frame": {"pad": {"grid": [["a", "b"], ["c", "d"]]}, "dx": 2, "dy": 1}},
    nested={
        "grid": [
            [{"frame": "left"}, {"pad": "middle", "dx": 1, "dy": 0}, "right"],
            [None, {"grid": [["x", "y"], ["z", "w"]]}, {"frame": {"frame": "deep"}}],
        ]
    },
    tree={
        "tree": "project/",
        "children": [
            {"tree": "src/", "children": ["main.py", "util.py"]},
            {"tree": "tests/", "children": ["test_main.py"]},
            "README",
        ],
    },
    plain={"grid": [["k", "=", "v"], ["key", "=", "value"]], "bars": False},
)


def show(console: Console, title: str, shape: Shape, options: RenderOptions) -> None:
    console.print(Rule(title))
    # Text() keeps rich from reading brackets in the output as markup
    console.print(Text(to_string(shape, options)))
    console.print()


def demo(console: Console, options: RenderOptions) -> None:
    """Render every built-in layout."""
    for name, description in LAYOUTS.items():
        show(console, name, parse_box(description), options)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render boxes, tables and trees as text.")
    parser.add_argument(
        "source",
        nargs="?",
        help=f"built-in layout ({', '.join(LAYOUTS)}) or path to a JSON description",
    )
    parser.add_argument("--indent", type=int, default=0, help="left margin for every line")
    parser.add_argument(
        "--width",
        choices=sorted(WIDTH_FUNCTIONS),
        default="bytes",
        help="how to measure the width of text",
    )
    parser.add_argument("--verbose", action="store_true", help="log layout details")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    console = Console()
    options = RenderOptions(indent=args.indent, width_fn=WIDTH_FUNCTIONS[args.width])

    if args.source is None:
        demo(console, options)
        return 0

    try:
        if args.source in LAYOUTS:
            shape = parse_box(LAYOUTS[args.source])
        else:
            shape = parse_box_json(Path(args.source).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.print(Text(f"error: {e}", style="bold red"))
        return 1

    show(console, args.source, shape, options)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
