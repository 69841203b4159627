"""Comma-aware selector scanning.

Selector lists cannot be split with a plain ``str.split(",")``: commas also
appear inside functional pseudo-classes (``:is(a, b)``), attribute values
(``[title="a,b"]``), quoted strings and escapes.  The scanner below walks the
text once with a small stack of states and reports only the characters that
sit in *open* context, i.e. outside strings, comments and attribute brackets.

Unbalanced input is never an error: an unterminated string, bracket or comment
runs to the end of the text.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable, Iterator

__all__ = [
    "scan",
    "split_selector_list",
    "find_block_start",
    "find_pseudo_classes",
    "replace_pseudo_classes",
]


class _State(Enum):
    DEFAULT = "default"
    PAREN = "paren"
    BRACKET = "bracket"
    SINGLE_QUOTE = "single-quote"
    DOUBLE_QUOTE = "double-quote"
    COMMENT = "comment"


_QUOTES = {"'": _State.SINGLE_QUOTE, '"': _State.DOUBLE_QUOTE}

# Characters that continue a css identifier (non-ascii always does).
_IDENT_CHAR_RE = re.compile(r"[\w\-\\]|[^\x00-\x7f]")


def scan(text: str, start: int = 0, stop: int | None = None) -> Iterator[tuple[int, str, int]]:
    """Yield ``(index, char, paren_depth)`` for each open-context character.

    Characters inside quotes, comments or ``[...]`` are not yielded, nor are
    backslash escapes.  Opening ``[`` and quotes are yielded before their
    content is skipped so callers can see where such a construct begins.
    """
    end = len(text) if stop is None else min(stop, len(text))
    stack = [_State.DEFAULT]
    depth = 0
    i = start
    while i < end:
        ch = text[i]
        state = stack[-1]

        if ch == "\\" and state is not _State.COMMENT:
            i += 2
            continue

        if state is _State.COMMENT:
            if ch == "*" and text.startswith("/", i + 1):
                stack.pop()
                i += 2
                continue
        elif state in (_State.SINGLE_QUOTE, _State.DOUBLE_QUOTE):
            if _QUOTES.get(ch) is state:
                stack.pop()
        elif ch == "/" and text.startswith("*", i + 1):
            stack.append(_State.COMMENT)
            i += 2
            continue
        elif ch in _QUOTES:
            if state is not _State.BRACKET:
                yield i, ch, depth
            stack.append(_QUOTES[ch])
        elif state is _State.BRACKET:
            if ch == "]":
                stack.pop()
        elif ch == "[":
            yield i, ch, depth
            stack.append(_State.BRACKET)
        elif ch == "(":
            yield i, ch, depth
            stack.append(_State.PAREN)
            depth += 1
        elif ch == ")" and state is _State.PAREN:
            stack.pop()
            depth -= 1
            yield i, ch, depth
        else:
            yield i, ch, depth
        i += 1


def split_selector_list(selector_list: str) -> list[str]:
    """Split *selector_list* on top-level commas.

    Pieces are returned unstripped, so ``",".join(pieces) == selector_list``.
    """
    pieces: list[str] = []
    last = 0
    for i, ch, depth in scan(selector_list):
        if ch == "," and depth == 0:
            pieces.append(selector_list[last:i])
            last = i + 1
    pieces.append(selector_list[last:])
    return pieces


def find_block_start(text: str, start: int = 0, stop: int | None = None) -> int:
    """Return the index of the ``{`` opening the rule block, or -1."""
    for i, ch, depth in scan(text, start, stop):
        if ch == "{" and depth == 0:
            return i
    return -1


def find_pseudo_classes(selector: str, names: Iterable[str]) -> list[tuple[int, int]]:
    """Return ``(start, end)`` spans of ``:name`` pseudo-classes in *selector*.

    Matching is case-insensitive and requires an identifier boundary after
    the name.  Escaped colons (``.a\\:hover``), pseudo-elements (``::x``) and
    occurrences inside attribute selectors or strings are not matches.
    Functional pseudo-classes do not shield their arguments, so the
    ``:hover`` in ``:is(a:hover)`` is found.
    """
    wanted = sorted({name.lower() for name in names}, key=len, reverse=True)
    spans: list[tuple[int, int]] = []
    for i, ch, _depth in scan(selector):
        if ch != ":" or selector.startswith(":", i + 1):
            continue
        if i > 0 and selector[i - 1] == ":":
            continue
        for name in wanted:
            end = i + 1 + len(name)
            if selector[i + 1:end].lower() != name:
                continue
            if end < len(selector) and (
                _IDENT_CHAR_RE.match(selector, end) or selector[end] == "("
            ):
                continue
            spans.append((i, end))
            break
    return spans


def replace_pseudo_classes(selector: str, spans: list[tuple[int, int]]) -> str:
    """Rewrite each ``:name`` span to the escaped class ``.\\:name``."""
    parts: list[str] = []
    last = 0
    for start, end in spans:
        parts.append(selector[last:start])
        parts.append(".\\:" + selector[start + 1:end].lower())
        last = end
    parts.append(selector[last:])
    return "".join(parts)
