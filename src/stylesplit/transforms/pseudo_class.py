"""Pseudo-class transform: add an escaped-class twin for interactive selectors.

Replay cannot produce a real pointer hover, so the player toggles a literal
``:hover`` class instead.  For that to have any effect every selector using
``:hover`` needs a sibling selector using ``.\\:hover``::

    a:hover, b { color: red; }

becomes::

    a:hover, b,
    a.\\:hover { color: red; }
"""

from __future__ import annotations

from typing import Iterable, Iterator

from stylesplit.css.selectors import (
    find_pseudo_classes,
    replace_pseudo_classes,
    split_selector_list,
)
from stylesplit.css.sheet import Edit, ParsedSheet


class PseudoClassTransform:
    """Append a class-based clone for each selector using an interactive pseudo-class."""

    def __init__(self, pseudo_classes: Iterable[str] = ("hover",)) -> None:
        self.pseudo_classes = tuple(pseudo_classes)

    def edits(self, sheet: ParsedSheet) -> Iterator[Edit]:
        for rule in sheet.style_rules():
            span = sheet.prelude_span(rule)
            if span is None:
                continue
            start, end = span
            prelude = sheet.text[start:end]
            addition = duplicate_selectors(prelude, self.pseudo_classes)
            if addition:
                # insert after the selector text, before the space preceding "{"
                selector_end = start + len(prelude.rstrip())
                yield Edit(selector_end, selector_end, addition)


def duplicate_selectors(selector_list: str, pseudo_classes: Iterable[str]) -> str:
    """Return the text to append to *selector_list*, or ``""`` if nothing matches.

    Clones already present in the list are not added again.
    """
    names = tuple(pseudo_classes)
    selectors = [s.strip() for s in split_selector_list(selector_list)]
    seen = set(selectors)
    clones: list[str] = []
    for selector in selectors:
        spans = find_pseudo_classes(selector, names)
        if not spans:
            continue
        clone = replace_pseudo_classes(selector, spans)
        if clone in seen:
            continue
        seen.add(clone)
        clones.append(clone)
    return "".join(",\n" + clone for clone in clones)
