"""Split recovery (capture) and split application (replay) for style text."""

from stylesplit.splitting.apply import (
    apply_css_splits,
    distribute_segments,
    split_adapted,
    strip_split_markers,
)
from stylesplit.splitting.normalize import NormalizedText, normalize, normalize_css_text
from stylesplit.splitting.recover import split_css_text

__all__ = [
    "split_css_text",
    "apply_css_splits",
    "distribute_segments",
    "split_adapted",
    "strip_split_markers",
    "NormalizedText",
    "normalize",
    "normalize_css_text",
]
