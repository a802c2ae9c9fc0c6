"""Tests for box_parser module."""

import pytest

from box_parser import BoxParseError, parse_box, parse_box_json
from box_types import Empty, Frame, Grid, GridStyle, Pad, Text, Tree
from textbox import to_string


class TestParseBox:
    """Tests for parsing decoded descriptions."""

    def test_null_is_empty(self) -> None:
        assert parse_box(None) == Empty()

    def test_string_is_text(self) -> None:
        assert parse_box("a\nb") == Text(("a", "b"))

    def test_text_forms(self) -> None:
        assert parse_box({"text": "a\nb"}) == Text(("a", "b"))
        assert parse_box({"text": ["a", "b"]}) == Text(("a", "b"))

    def test_frame_and_pad(self) -> None:
        shape = parse_box({"frame": {"pad": "x", "dx": 2, "dy": 0}})
        assert shape == Frame(Pad(2, 0, Text(("x",))))

    def test_pad_defaults(self) -> None:
        assert parse_box({"pad": "x"}) == Pad(1, 1, Text(("x",)))

    def test_grid(self) -> None:
        shape = parse_box({"grid": [["a", None]], "bars": False})
        assert isinstance(shape, Grid)
        assert shape.style is GridStyle.NONE
        assert shape.cells == ((Text(("a",)), Empty()),)

    def test_tree(self) -> None:
        shape = parse_box({"tree": "root", "children": ["a", "b"], "indent": 2})
        assert shape == Tree(2, Text(("root",)), (Text(("a",)), Text(("b",))))

    def test_table_renders(self) -> None:
        shape = parse_box({"frame": {"grid": [["name", "size"], ["a.txt", "12"]]}})
        expected = "\n".join(
            [
                "+----------+",
                "|name |size|",
                "|-----+----|",
                "|a.txt|12  |",
                "+----------+",
            ]
        )
        assert to_string(shape) == expected


class TestParseErrors:
    """Malformed descriptions report where they went wrong."""

    def test_not_a_box(self) -> None:
        with pytest.raises(ValueError, match=r"Invalid box at \$"):
            parse_box(42)

    def test_ambiguous_kind(self) -> None:
        with pytest.raises(ValueError, match="Expected exactly one of"):
            parse_box({"frame": "a", "text": "b"})

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="Unknown keys for frame"):
            parse_box({"frame": "a", "dx": 1})

    def test_nested_error_path(self) -> None:
        with pytest.raises(ValueError, match=r"\$\.frame\.grid\[0\]\[1\]"):
            parse_box({"frame": {"grid": [["a", 3]]}})

    def test_ragged_grid(self) -> None:
        with pytest.raises(ValueError, match="Inconsistent row lengths"):
            parse_box({"grid": [["a", "b"], ["c"]]})

    def test_bad_padding(self) -> None:
        with pytest.raises(ValueError, match="dx must be an integer"):
            parse_box({"pad": "x", "dx": "wide"})

    def test_tree_without_children(self) -> None:
        with pytest.raises(ValueError, match="at least one child"):
            parse_box({"tree": "root"})

    def test_invalid_json(self) -> None:
        with pytest.raises(ValueError, match="Invalid JSON"):
            parse_box_json("{not json")


class TestParseBoxJson:
    """Tests for JSON input."""

    def test_parse_json(self) -> None:
        shape = parse_box_json('{"tree": "a", "children": ["b"]}')
        assert to_string(shape) == "a\n`+- b"


class TestErrorLocation:
    """Errors carry the path of the node that failed."""

    def test_builder_error_gets_path(self) -> None:
        with pytest.raises(BoxParseError, match=r"In pad at \$\.frame: Padding") as info:
            parse_box({"frame": {"pad": "x", "dx": -1}})
        assert info.value.path == "$.frame"

    def test_innermost_path_kept(self) -> None:
        with pytest.raises(BoxParseError) as info:
            parse_box({"frame": {"grid": [["a", 3]]}})
        assert info.value.path == "$.frame.grid[0][1]"

    def test_parse_error_is_value_error(self) -> None:
        assert issubclass(BoxParseError, ValueError)

    def test_zero_height_tree_child(self) -> None:
        with pytest.raises(BoxParseError, match="at least one line tall") as info:
            parse_box({"frame": {"tree": "r", "children": ["a", None]}})
        assert info.value.path == "$.frame"
