"""Media feature transform: ``min-device-width`` -> ``min-width`` and friends."""

from __future__ import annotations

import logging
import re
from typing import Iterator

from tinycss2.ast import Node

from stylesplit.css.sheet import Edit, ParsedSheet

logger = logging.getLogger(__name__)

_DEVICE_FEATURE_RE = re.compile(r"^(?:min|max)-device-(?:width|height)$", re.IGNORECASE)

# At-rules whose prelude is (or ends with) a media query list.
_MEDIA_AT_RULES = ("media", "import", "custom-media")

_PREFIX_LEN = len("min")
_DEVICE_LEN = len("-device")


class MediaFeatureTransform:
    """Rewrite device-prefixed width/height media features to viewport ones.

    A replayed page reports its size through the viewport, so a query on
    ``(min-device-width: 1200px)`` would never match there.  Every such
    feature test is rewritten; other features, combinators and nesting are
    left as they are.
    """

    def edits(self, sheet: ParsedSheet) -> Iterator[Edit]:
        for rule in sheet.at_rules(*_MEDIA_AT_RULES):
            yield from self._feature_edits(sheet, rule.prelude, in_parens=False)

    def _feature_edits(
        self, sheet: ParsedSheet, tokens: list[Node], in_parens: bool
    ) -> Iterator[Edit]:
        for index, token in enumerate(tokens):
            if token.type == "() block":
                yield from self._feature_edits(sheet, token.content, in_parens=True)
            elif token.type == "function":
                yield from self._feature_edits(sheet, token.arguments, in_parens=True)
            elif (
                in_parens
                and token.type == "ident"
                and _DEVICE_FEATURE_RE.match(token.value)
                and _followed_by_colon(tokens, index)
            ):
                start = sheet.offset(token)
                raw = sheet.text[start:start + len(token.value)]
                if raw.lower() != token.lower_value:
                    # escaped in the source; its raw length is unknown
                    logger.debug("Skipping escaped media feature at %d", start)
                    continue
                replacement = raw[:_PREFIX_LEN] + raw[_PREFIX_LEN + _DEVICE_LEN:]
                yield Edit(start, start + len(raw), replacement)


def _followed_by_colon(tokens: list[Node], index: int) -> bool:
    for token in tokens[index + 1:]:
        if token.type in ("whitespace", "comment"):
            continue
        return token.type == "literal" and token.value == ":"
    return False
