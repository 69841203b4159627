"""Base protocol for stylesheet transforms."""

from __future__ import annotations

from typing import Iterable, Protocol

from stylesplit.css.sheet import Edit, ParsedSheet


class Transform(Protocol):
    """A rule plugin: inspects a parsed sheet and proposes source edits."""

    def edits(self, sheet: ParsedSheet) -> Iterable[Edit]: ...
