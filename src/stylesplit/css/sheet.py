"""Parsed stylesheet with exact source offsets.

tinycss2 gives the rule structure but its serializer is not byte-exact (it
may insert ``/**/`` between adjacent tokens).  Replay
needs every untouched byte preserved, comments included, so rewrites are
expressed as :class:`Edit` objects against the original text and spliced in
by :func:`apply_edits`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator

import tinycss2
from tinycss2.ast import AtRule, Node, QualifiedRule

from stylesplit.css.selectors import find_block_start

logger = logging.getLogger(__name__)

__all__ = ["Edit", "ParsedSheet", "apply_edits", "map_offset", "GROUP_AT_RULES"]

# At-rules whose block holds a list of rules (and may hold style rules).
GROUP_AT_RULES = frozenset({
    "media",
    "supports",
    "layer",
    "container",
    "document",
    "-moz-document",
    "scope",
    "starting-style",
})

# Line breaks as counted by the tinycss2 tokenizer.
_NEWLINE_RE = re.compile(r"\r\n|[\r\n\f]")


@dataclass(frozen=True)
class Edit:
    """Replace ``text[start:end]`` with ``replacement``."""

    start: int
    end: int
    replacement: str

    @property
    def delta(self) -> int:
        return len(self.replacement) - (self.end - self.start)


class ParsedSheet:
    """A stylesheet text parsed once, with node positions as string offsets."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.rules: list[Node] = tinycss2.parse_stylesheet(
            text, skip_comments=False, skip_whitespace=False
        )
        self._line_starts = [0] + [m.end() for m in _NEWLINE_RE.finditer(text)]

    def offset(self, node: Node) -> int:
        """Return the index in :attr:`text` where *node* starts."""
        return self._line_starts[node.source_line - 1] + node.source_column - 1

    def walk(self) -> Iterator[QualifiedRule | AtRule]:
        """Yield every rule in source order.

        Descends into group at-rules and into style rules, so nested style
        rules (``.a { &:hover { ... } }``) are yielded after their parent.
        """
        yield from self._walk(self.rules, nested=False)

    def _walk(self, nodes: list[Node], nested: bool) -> Iterator[QualifiedRule | AtRule]:
        for node in nodes:
            if isinstance(node, QualifiedRule):
                yield node
                yield from self._walk(self._block_contents(node.content), nested=True)
            elif isinstance(node, AtRule):
                yield node
                if node.content is None or node.lower_at_keyword not in GROUP_AT_RULES:
                    continue
                if nested:
                    # inside a style rule the block mixes declarations and rules
                    children = self._block_contents(node.content)
                else:
                    children = tinycss2.parse_rule_list(
                        node.content, skip_comments=False, skip_whitespace=False
                    )
                yield from self._walk(children, nested)

    @staticmethod
    def _block_contents(content: list[Node]) -> list[Node]:
        return tinycss2.parse_blocks_contents(
            content, skip_comments=False, skip_whitespace=False
        )

    def style_rules(self) -> Iterator[QualifiedRule]:
        for rule in self.walk():
            if isinstance(rule, QualifiedRule):
                yield rule

    def at_rules(self, *keywords: str) -> Iterator[AtRule]:
        for rule in self.walk():
            if isinstance(rule, AtRule) and (not keywords or rule.lower_at_keyword in keywords):
                yield rule

    def prelude_span(self, rule: QualifiedRule) -> tuple[int, int] | None:
        """Return ``(start, end)`` of the selector text, or None for a rule without a block."""
        start = self.offset(rule)
        brace = find_block_start(self.text, start)
        if brace == -1:
            return None
        return start, brace


def apply_edits(text: str, edits: list[Edit]) -> tuple[str, list[Edit]]:
    """Splice *edits* into *text*.

    Returns the new text and the edits actually applied, sorted.  An edit that
    overlaps an earlier one is dropped.
    """
    applied: list[Edit] = []
    parts: list[str] = []
    last = 0
    for edit in sorted(edits, key=lambda e: (e.start, e.end)):
        if edit.start < last:
            logger.warning(
                "Dropping overlapping edit at %d-%d (previous edit ends at %d)",
                edit.start,
                edit.end,
                last,
            )
            continue
        parts.append(text[last:edit.start])
        parts.append(edit.replacement)
        last = edit.end
        applied.append(edit)
    parts.append(text[last:])
    return "".join(parts), applied


def map_offset(position: int, edits: list[Edit]) -> int:
    """Map *position* in the original text to the edited text.

    *edits* must be sorted and non-overlapping, as returned by
    :func:`apply_edits`.  Text inserted exactly at *position* lands after it;
    a position inside a replaced span is clamped into the replacement.
    """
    shift = 0
    for edit in edits:
        if edit.start >= position:
            break
        if edit.end <= position:
            shift += edit.delta
            continue
        inside = min(position - edit.start, len(edit.replacement))
        return edit.start + shift + inside
    return position + shift
