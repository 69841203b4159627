"""stylesplit: capture-time split recovery and replay-time split application for <style> text."""

from __future__ import annotations

__version__ = "0.1.0"

from stylesplit.capture import (
    StaticStyleSource,
    StyleElementSource,
    fragments_from_json,
    mark_css_splits,
)
from stylesplit.config import SPLIT_MARKER, SplitConfig, TransformOptions
from stylesplit.errors import FragmentFormatError, SnapshotFormatError, StyleSplitError
from stylesplit.model import ElementNode, NodeType, TextNode
from stylesplit.splitting import apply_css_splits, split_css_text, strip_split_markers
from stylesplit.transforms import (
    BuildCache,
    adapt_css,
    adapt_css_for_replay,
    duplicate_interactive_pseudo_classes,
    normalize_media_features,
)

__all__ = [
    "__version__",
    # config
    "SPLIT_MARKER",
    "SplitConfig",
    "TransformOptions",
    # errors
    "StyleSplitError",
    "SnapshotFormatError",
    "FragmentFormatError",
    # model
    "NodeType",
    "TextNode",
    "ElementNode",
    # transforms
    "BuildCache",
    "adapt_css",
    "adapt_css_for_replay",
    "normalize_media_features",
    "duplicate_interactive_pseudo_classes",
    # splitting
    "split_css_text",
    "apply_css_splits",
    "strip_split_markers",
    # capture
    "StyleElementSource",
    "StaticStyleSource",
    "mark_css_splits",
    "fragments_from_json",
]
