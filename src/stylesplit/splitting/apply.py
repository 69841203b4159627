"""Rebuild a ``<style>`` element's text nodes from marked css text.

The recorded css text holds the recovered fragments joined by
:data:`~stylesplit.config.SPLIT_MARKER`.  At replay the element's serialized
text children are refilled from it, after the replay adaptations have been
run over the whole text.
"""

from __future__ import annotations

import logging

from stylesplit.config import SPLIT_MARKER, TransformOptions
from stylesplit.css.sheet import map_offset
from stylesplit.model.node import ElementNode
from stylesplit.transforms import BuildCache, adapt_css

logger = logging.getLogger(__name__)

__all__ = ["apply_css_splits", "distribute_segments", "split_adapted", "strip_split_markers"]


def strip_split_markers(css_text: str, marker: str = SPLIT_MARKER) -> str:
    """Return *css_text* with every split marker removed."""
    return css_text.replace(marker, "")


def distribute_segments(segments: list[str], slot_count: int) -> list[str]:
    """Fit *segments* into exactly *slot_count* strings.

    Extra segments are merged into the last slot; missing ones are empty.
    """
    if slot_count <= 0:
        return []
    if len(segments) > slot_count:
        segments = segments[:slot_count - 1] + ["".join(segments[slot_count - 1:])]
    return segments + [""] * (slot_count - len(segments))


def split_adapted(
    css_text: str,
    allow_invalid_fragments: bool,
    options: TransformOptions | None = None,
    cache: BuildCache | None = None,
    marker: str = SPLIT_MARKER,
) -> list[str]:
    """Adapt marked *css_text* for replay and return its segments.

    Transforms always see the whole stylesheet.  When fragments are valid css
    on their own, markers sit between rules and survive adaptation as plain
    comments.  When they may not be (a marker in the middle of a selector),
    markers are taken out first and their offsets carried through the edits.
    """
    if options is None:
        options = TransformOptions()
    if not options.enabled:
        return css_text.split(marker)
    if not allow_invalid_fragments:
        return adapt_css(css_text, options, cache).css_text.split(marker)

    segments = css_text.split(marker)
    adapted = adapt_css("".join(segments), options, cache)
    edits = list(adapted.edits)
    bounds = [0]
    offset = 0
    for segment in segments[:-1]:
        offset += len(segment)
        bounds.append(map_offset(offset, edits))
    bounds.append(len(adapted.css_text))
    return [adapted.css_text[start:end] for start, end in zip(bounds, bounds[1:])]


def apply_css_splits(
    node: ElementNode,
    css_text: str,
    allow_invalid_fragments: bool,
    options: TransformOptions | None = None,
    cache: BuildCache | None = None,
    marker: str = SPLIT_MARKER,
) -> None:
    """Write marked *css_text* into the text slots of *node*, in place.

    Every text slot is overwritten.  With more segments than slots the
    overflow goes to the last slot; with fewer, trailing slots become empty.
    """
    if not node.is_style:
        logger.debug("Applying css splits to a <%s> element", node.tag_name)
    slots = node.text_slots
    if not slots:
        logger.debug("Style element has no text slots; nothing to apply")
        return
    segments = split_adapted(css_text, allow_invalid_fragments, options, cache, marker)
    if len(segments) != len(slots):
        logger.debug(
            "Distributing %d css segment(s) over %d text slot(s)", len(segments), len(slots)
        )
    for slot, text in zip(slots, distribute_segments(segments, len(slots))):
        slot.text_content = text
