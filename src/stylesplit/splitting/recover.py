"""Recover per-text-node split points from browser-serialized css.

A ``<style>`` element can hold several text nodes (a page appending rules one
node at a time is common).  At capture time only the browser's normalized
serialization of the whole sheet is trustworthy, but replay must rebuild the
same number of text nodes so later mutations that address a node by index
still line up.  :func:`split_css_text` cuts the serialized text into one piece
per authored node.

Matching is strictly left to right.  A cursor moves through the serialized
text and never goes back, so repeated identical fragments are assigned to
repeated sections in document order, and the total work stays linear in the
input size for the common cases:

1. the authored fragment appears verbatim at the cursor;
2. the normalized fragment appears verbatim at the normalized cursor;
3. otherwise the start of the next fragment is searched for in a window
   after the cursor (see :meth:`_SplitRecovery._anchor`).
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from stylesplit.config import SplitConfig
from stylesplit.splitting.normalize import NormalizedText, normalize

logger = logging.getLogger(__name__)

__all__ = ["split_css_text"]

_MIN_ANCHOR = 3


def split_css_text(
    css_text: str,
    fragments: Sequence[str],
    normalize_units: bool | None = None,
    config: SplitConfig | None = None,
) -> list[str]:
    """Split *css_text* into one piece per authored fragment.

    The pieces always concatenate to *css_text*.  When a split point cannot be
    found, the remaining text is returned as a single trailing piece, so the
    result may then be shorter than *fragments*.

    *normalize_units* overrides ``config.normalize_units``; when true, an
    authored ``0`` is treated as equal to a serialized ``0px``.
    """
    fragments = list(fragments)
    if len(fragments) <= 1:
        return [css_text]
    if config is None:
        config = SplitConfig()
    if normalize_units is not None and normalize_units != config.normalize_units:
        config = replace(config, normalize_units=normalize_units)
    return _SplitRecovery(css_text, fragments, config).run()


class _SplitRecovery:
    def __init__(self, css_text: str, fragments: list[str], config: SplitConfig) -> None:
        self.css_text = css_text
        self.fragments = fragments
        self.config = config
        self._normalized: NormalizedText | None = None
        self._fragment_norms: dict[int, str] = {}

    @property
    def normalized(self) -> NormalizedText:
        # built lazily: verbatim matches never need it
        if self._normalized is None:
            self._normalized = normalize(self.css_text, self.config.normalize_units)
        return self._normalized

    def fragment_norm(self, index: int) -> str:
        if index not in self._fragment_norms:
            self._fragment_norms[index] = normalize(
                self.fragments[index], self.config.normalize_units
            ).text
        return self._fragment_norms[index]

    def run(self) -> list[str]:
        splits: list[str] = []
        position = 0
        for index in range(len(self.fragments) - 1):
            end = self._locate(index, position)
            if end is None:
                logger.warning(
                    "No split point found for css fragment %d of %d; "
                    "keeping the remaining %d chars together",
                    index + 1,
                    len(self.fragments),
                    len(self.css_text) - position,
                )
                break
            splits.append(self.css_text[position:end])
            position = end
        splits.append(self.css_text[position:])
        return splits

    def _locate(self, index: int, position: int) -> int | None:
        """Return the source offset where fragment *index* ends, or None."""
        fragment = self.fragments[index]
        if self.css_text.startswith(fragment, position):
            return position + len(fragment)

        normalized = self.normalized
        cursor = normalized.from_source(position)
        fragment_norm = self.fragment_norm(index)
        if normalized.text.startswith(fragment_norm, cursor):
            boundary = cursor + len(fragment_norm)
        else:
            boundary = self._anchor(index, cursor, fragment_norm)
            if boundary is None:
                return None
        if boundary <= cursor:
            return position
        return max(position, normalized.boundary_to_source(boundary))

    def _anchor(self, index: int, cursor: int, fragment_norm: str) -> int | None:
        """Find where the next fragment starts when fragment *index* did not match.

        The longest prefix (up to ``anchor_max_length``) of the next non-empty
        normalized fragment that occurs in a window after the cursor is the
        anchor.  When the current fragment ends a rule, an occurrence right
        after a ``}`` is preferred over an earlier one mid-rule.
        """
        following = ""
        for later in range(index + 1, len(self.fragments)):
            following = self.fragment_norm(later)
            if following:
                break
        text = self.normalized.text
        if not following:
            # only whitespace and comments remain to be placed
            return len(text)

        low = cursor + 1
        expected = cursor + len(fragment_norm)
        high = min(len(text), expected + max(len(fragment_norm), self.config.search_slack))
        ends_rule = fragment_norm.endswith("}")
        found = self._find_prefix(following, low, high, ends_rule)
        if found is None and high < len(text):
            logger.debug("Widening split search for fragment %d past the window", index + 1)
            found = self._find_prefix(following, low, len(text), ends_rule)
        return found

    def _find_prefix(self, following: str, low: int, high: int, ends_rule: bool) -> int | None:
        text = self.normalized.text
        longest = min(len(following), self.config.anchor_max_length)
        shortest = min(_MIN_ANCHOR, longest)

        def first(length: int) -> int:
            return text.find(following[:length], low, high + length)

        if first(shortest) == -1:
            return None
        # a prefix that occurs implies all shorter ones occur at the same place
        lo, hi = shortest, longest
        while lo < hi:
            mid = (lo + hi + 1) // 2
            if first(mid) != -1:
                lo = mid
            else:
                hi = mid - 1
        prefix = following[:lo]
        candidate = first(lo)
        if ends_rule:
            match = candidate
            while match != -1:
                if text[match - 1] == "}":
                    return match
                match = text.find(prefix, match + 1, high + lo)
        return candidate
