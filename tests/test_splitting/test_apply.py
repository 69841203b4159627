"""Tests for refilling a style element's text slots from marked css."""

import logging

import pytest

from stylesplit.config import SPLIT_MARKER, TransformOptions
from stylesplit.model import ElementNode, NodeType, TextNode
from stylesplit.splitting import (
    apply_css_splits,
    distribute_segments,
    split_adapted,
    strip_split_markers,
)
from stylesplit.transforms import BuildCache

HALF = ".a { background-color: red; }"
OTHER_HALF = ".x { background-color: red; }"
MARKED = SPLIT_MARKER.join([HALF, OTHER_HALF])


def _slots(node):
    return [slot.text_content for slot in node.text_slots]


@pytest.fixture
def style2():
    return ElementNode.style(2)


# ---------------------------------------------------------------------------
# apply_css_splits
# ---------------------------------------------------------------------------


class TestApplyCssSplits:
    def test_happy_path(self, style2):
        apply_css_splits(style2, MARKED, False)
        assert _slots(style2) == [HALF, OTHER_HALF]

    def test_too_many_slots(self):
        node = ElementNode.style(3)
        apply_css_splits(node, MARKED, False)
        assert _slots(node) == [HALF, OTHER_HALF, ""]

    def test_too_few_slots(self):
        node = ElementNode.style(1)
        apply_css_splits(node, MARKED, False)
        assert _slots(node) == [HALF + OTHER_HALF]

    def test_invalid_halves(self, style2):
        marked = SPLIT_MARKER.join(["a:hov", "er { color: red; }"])
        apply_css_splits(style2, marked, True)
        assert _slots(style2) == ["a:hov", "er,\na.\\:hover { color: red; }"]
        assert "".join(_slots(style2)) == "a:hover,\na.\\:hover { color: red; }"

    def test_invalid_thirds(self):
        node = ElementNode.style(3)
        start = ".a:hover { background-color"
        middle = ": red; } input:hover {"
        end = "border: 1px solid purple; }"
        apply_css_splits(node, SPLIT_MARKER.join([start, middle, end]), True)
        assert _slots(node) == [
            start.replace(".a:hover", ".a:hover,\n.a.\\:hover"),
            middle.replace("input:hover", "input:hover,\ninput.\\:hover"),
            end,
        ]

    def test_media_rewrite_across_marker(self, style2):
        marked = SPLIT_MARKER.join(["@media (min-device-wi", "dth: 600px) { a { x: y } }"])
        apply_css_splits(style2, marked, True)
        assert "".join(_slots(style2)) == "@media (min-width: 600px) { a { x: y } }"

    def test_valid_fragments_keep_markers_until_split(self, style2):
        marked = SPLIT_MARKER.join(["a:hover { x: y }", "b { z: 1 }"])
        apply_css_splits(style2, marked, False)
        assert _slots(style2) == ["a:hover,\na.\\:hover { x: y }", "b { z: 1 }"]

    def test_disabled_options_split_verbatim(self, style2):
        marked = SPLIT_MARKER.join(["a:hov", "er { x: y }"])
        apply_css_splits(style2, marked, True, options=TransformOptions.disabled())
        assert _slots(style2) == ["a:hov", "er { x: y }"]

    def test_existing_content_replaced(self):
        node = ElementNode("style", child_nodes=[TextNode("old"), TextNode("older")])
        apply_css_splits(node, "b { x: y }", False)
        assert _slots(node) == ["b { x: y }", ""]

    def test_comment_children_are_not_slots(self):
        comment = TextNode("keep me", type=NodeType.COMMENT)
        node = ElementNode("style", child_nodes=[TextNode(), comment, TextNode()])
        apply_css_splits(node, MARKED, False)
        assert _slots(node) == [HALF, OTHER_HALF]
        assert comment.text_content == "keep me"

    def test_no_slots_is_a_noop(self):
        node = ElementNode("style")
        apply_css_splits(node, MARKED, False)
        assert node.child_nodes == []

    def test_non_style_element_logged(self, caplog):
        node = ElementNode("div", child_nodes=[TextNode()])
        with caplog.at_level(logging.DEBUG, logger="stylesplit.splitting.apply"):
            apply_css_splits(node, "a { x: y }", False)
        assert _slots(node) == ["a { x: y }"]
        assert "<div> element" in caplog.text

    def test_cache_reused(self, style2):
        cache = BuildCache()
        apply_css_splits(style2, MARKED, False, cache=cache)
        apply_css_splits(ElementNode.style(2), MARKED, False, cache=cache)
        assert len(cache.adapted) == 1

    def test_custom_marker(self, style2):
        apply_css_splits(style2, "a { x: y }/*cut*/b { x: y }", False, marker="/*cut*/")
        assert _slots(style2) == ["a { x: y }", "b { x: y }"]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestDistributeSegments:
    @pytest.mark.parametrize(
        "segments, slot_count, expected",
        [
            (["a", "b"], 2, ["a", "b"]),
            (["a", "b"], 1, ["ab"]),
            (["a", "b"], 3, ["a", "b", ""]),
            (["a", "b", "c"], 2, ["a", "bc"]),
            (["a"], 0, []),
        ],
    )
    def test_policy(self, segments, slot_count, expected):
        assert distribute_segments(segments, slot_count) == expected


class TestSplitAdapted:
    def test_no_marker(self):
        assert split_adapted("a { x: y }", False) == ["a { x: y }"]

    def test_insertion_at_marker_goes_after_it(self):
        marked = SPLIT_MARKER.join(["a:hover", " { x: y }"])
        assert split_adapted(marked, True) == ["a:hover", ",\na.\\:hover { x: y }"]


class TestStripSplitMarkers:
    def test_strip(self):
        assert strip_split_markers(MARKED) == HALF + OTHER_HALF

    def test_custom_marker(self):
        assert strip_split_markers("a|b|c", "|") == "abc"
