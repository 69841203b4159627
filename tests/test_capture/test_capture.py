"""Tests for the capture-side marking of recovered splits."""

import logging

import pytest

from stylesplit.capture import StaticStyleSource, fragments_from_json, mark_css_splits
from stylesplit.config import SPLIT_MARKER, SplitConfig
from stylesplit.errors import FragmentFormatError, StyleSplitError


# ---------------------------------------------------------------------------
# mark_css_splits
# ---------------------------------------------------------------------------


class TestMarkCssSplits:
    def test_fragments_joined_with_marker(self):
        source = StaticStyleSource(
            ".a { color: red; }.b { color: blue; }", [".a{color:red}", ".b{color:blue}"]
        )
        assert mark_css_splits(source) == ".a { color: red; }/* rr_split */.b { color: blue; }"

    def test_single_fragment_unmarked(self):
        source = StaticStyleSource(".a { color: red; }", [".a{color:red}"])
        assert mark_css_splits(source) == ".a { color: red; }"

    def test_no_fragments_unmarked(self):
        assert mark_css_splits(StaticStyleSource("", [])) == ""

    def test_marker_removed_gives_css_back(self):
        css = ".a { x: 1; }\n.b { y: 2; }\n.c { z: 3; }"
        marked = mark_css_splits(StaticStyleSource(css, ["a{x:1}", ".b{y:2}", ".c{z:3}"]))
        assert marked.replace(SPLIT_MARKER, "") == css

    def test_marker_collision_left_unmarked(self, caplog):
        css = ".a { color: red; }.b { color: blue; }"
        source = StaticStyleSource(css, [".a{color:red}/* rr_split */", ".b{color:blue}"])
        with caplog.at_level(logging.WARNING, logger="stylesplit.capture"):
            assert mark_css_splits(source) == css
        assert "split marker" in caplog.text

    def test_custom_marker(self):
        source = StaticStyleSource("a { x: y; }b { x: y; }", ["a{x:y}", "b{x:y}"])
        config = SplitConfig(marker="/*|*/")
        assert mark_css_splits(source, config) == "a { x: y; }/*|*/b { x: y; }"

    def test_unrecovered_split_logged(self, caplog):
        css = ".a { color: red; }"
        source = StaticStyleSource(css, ["#x{}", "#y{}"])
        with caplog.at_level(logging.WARNING, logger="stylesplit"):
            assert mark_css_splits(source) == css
        assert "No split point found" in caplog.text


# ---------------------------------------------------------------------------
# fragments_from_json
# ---------------------------------------------------------------------------


class TestFragmentsFromJson:
    def test_list_of_strings(self):
        assert fragments_from_json('["a{}", "b{}"]') == ["a{}", "b{}"]

    def test_invalid_json(self):
        with pytest.raises(FragmentFormatError, match="invalid JSON"):
            fragments_from_json("[")

    def test_not_a_list(self):
        with pytest.raises(FragmentFormatError, match="got dict"):
            fragments_from_json('{"a": 1}')

    def test_non_string_item(self):
        with pytest.raises(StyleSplitError, match="fragment 1 is int"):
            fragments_from_json('["a", 2]')
