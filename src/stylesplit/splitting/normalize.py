"""Normalization used to compare authored css with browser-serialized css.

Reading ``sheet.cssRules`` back from a browser does not give the authored
text: whitespace is collapsed or added, comments disappear, trailing
semicolons are added, vendor-prefixed declarations are dropped, single quotes
become double quotes and ``0`` becomes ``0px``.  Both sides are reduced to a
form where those differences vanish.  The reduction keeps a run table so
positions in the normalized text can be mapped back to the source.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass

__all__ = ["NormalizedText", "normalize", "normalize_css_text"]

_NOISE_PATTERN = r"""
    (?<=[{;])\s*-(?:webkit|moz|ms|o)-[\w-]+\s*:[^;{}]*   # vendor-prefixed declaration
  | /\*.*?(?:\*/|\Z)                                      # comment, unterminated runs to the end
  | \s+
  | ;
"""

_UNIT_PATTERN = r"""
  | (?<![\w.])0(?P<unit>px)(?![\w-])                      # 0px is serialized for an authored 0
"""

_NOISE_RE = re.compile(_NOISE_PATTERN, re.VERBOSE | re.DOTALL | re.IGNORECASE)
_NOISE_WITH_UNITS_RE = re.compile(
    _NOISE_PATTERN + _UNIT_PATTERN, re.VERBOSE | re.DOTALL | re.IGNORECASE
)


@dataclass(frozen=True)
class NormalizedText:
    """Normalized text plus the runs of source characters it was built from.

    Run ``r`` covers normalized indexes ``norm_starts[r]`` up to the next run
    and maps them one-to-one onto source indexes from ``orig_starts[r]``.
    """

    text: str
    source_length: int
    norm_starts: tuple[int, ...]
    orig_starts: tuple[int, ...]

    def _run_length(self, run: int) -> int:
        if run + 1 < len(self.norm_starts):
            return self.norm_starts[run + 1] - self.norm_starts[run]
        return len(self.text) - self.norm_starts[run]

    def to_source(self, index: int) -> int:
        """Return the source index of normalized character *index*."""
        run = bisect_right(self.norm_starts, index) - 1
        return self.orig_starts[run] + index - self.norm_starts[run]

    def from_source(self, position: int) -> int:
        """Return how many normalized characters come from ``source[:position]``."""
        run = bisect_right(self.orig_starts, position) - 1
        if run < 0:
            return 0
        return self.norm_starts[run] + min(position - self.orig_starts[run], self._run_length(run))

    def boundary_to_source(self, index: int) -> int:
        """Map a boundary before normalized *index* to a source boundary.

        The boundary is placed right after the last kept character, so removed
        whitespace and comments at a boundary belong to the text that follows.
        """
        if index <= 0:
            return 0
        if index >= len(self.text):
            if not self.text:
                return 0
            return self.to_source(len(self.text) - 1) + 1
        return self.to_source(index - 1) + 1


def normalize(css_text: str, normalize_units: bool = True) -> NormalizedText:
    """Normalize *css_text*, keeping the mapping back to source positions."""
    pattern = _NOISE_WITH_UNITS_RE if normalize_units else _NOISE_RE
    pieces: list[str] = []
    norm_starts: list[int] = []
    orig_starts: list[int] = []
    kept = 0
    last = 0
    for match in pattern.finditer(css_text):
        if normalize_units and match.group("unit"):
            start, end = match.span("unit")
        else:
            start, end = match.span()
        if start > last:
            norm_starts.append(kept)
            orig_starts.append(last)
            pieces.append(css_text[last:start])
            kept += start - last
        last = end
    if last < len(css_text):
        norm_starts.append(kept)
        orig_starts.append(last)
        pieces.append(css_text[last:])
    text = "".join(pieces).replace("'", '"')
    return NormalizedText(text, len(css_text), tuple(norm_starts), tuple(orig_starts))


def normalize_css_text(css_text: str, normalize_units: bool = True) -> str:
    """Return only the normalized form of *css_text*."""
    return normalize(css_text, normalize_units).text
