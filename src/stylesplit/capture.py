"""Capture-side entry point: serialize a ``<style>`` element's css with split markers."""

from __future__ import annotations

import json
import logging
from typing import Protocol, Sequence

from stylesplit.config import SplitConfig
from stylesplit.errors import FragmentFormatError
from stylesplit.splitting.recover import split_css_text

logger = logging.getLogger(__name__)

__all__ = ["StyleElementSource", "StaticStyleSource", "mark_css_splits", "fragments_from_json"]


class StyleElementSource(Protocol):
    """Read access to a live ``<style>`` element, provided by the DOM layer."""

    def read_normalized_stylesheet_text(self) -> str:
        """Return the sheet's rules as the browser serializes them."""
        ...

    def read_authored_fragments(self) -> Sequence[str]:
        """Return the raw content of each child text node, in document order."""
        ...


class StaticStyleSource:
    """A :class:`StyleElementSource` over already-read values."""

    def __init__(self, css_text: str, fragments: Sequence[str]) -> None:
        self.css_text = css_text
        self.fragments = list(fragments)

    def read_normalized_stylesheet_text(self) -> str:
        return self.css_text

    def read_authored_fragments(self) -> Sequence[str]:
        return self.fragments


def mark_css_splits(source: StyleElementSource, config: SplitConfig | None = None) -> str:
    """Return the element's css text with the marker between recovered fragments.

    An element with a single text node gets its css text unmarked.  If an
    authored fragment already contains the marker, the text is also returned
    unmarked: replay would otherwise cut it in the wrong place.
    """
    if config is None:
        config = SplitConfig()
    css_text = source.read_normalized_stylesheet_text()
    fragments = list(source.read_authored_fragments())
    if len(fragments) <= 1:
        return css_text
    if any(config.marker in fragment for fragment in fragments):
        logger.warning(
            "Authored css already contains the split marker %r; recording it unsplit",
            config.marker,
        )
        return css_text
    splits = split_css_text(css_text, fragments, config=config)
    if len(splits) != len(fragments):
        logger.debug("Recovered %d of %d css fragments", len(splits), len(fragments))
    return config.marker.join(splits)


def fragments_from_json(raw: str) -> list[str]:
    """Parse a JSON list of authored fragments.

    Raises FragmentFormatError if *raw* is not a JSON list of strings.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise FragmentFormatError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise FragmentFormatError(f"expected a list of strings, got {type(data).__name__}")
    for index, item in enumerate(data):
        if not isinstance(item, str):
            raise FragmentFormatError(
                f"fragment {index} is {type(item).__name__}, expected a string"
            )
    return data
