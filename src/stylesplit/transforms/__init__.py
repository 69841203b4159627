"""Replay adaptations of stylesheet text.

Each plugin proposes :class:`~stylesplit.css.sheet.Edit` objects against a
single parse of the text; edits are then spliced into the original so that
everything not rewritten, comments included, comes out byte-for-byte.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from stylesplit.config import TransformOptions
from stylesplit.css.sheet import Edit, ParsedSheet, apply_edits
from stylesplit.transforms.base import Transform
from stylesplit.transforms.media import MediaFeatureTransform
from stylesplit.transforms.pseudo_class import PseudoClassTransform

logger = logging.getLogger(__name__)

__all__ = [
    "Transform",
    "MediaFeatureTransform",
    "PseudoClassTransform",
    "AdaptedCss",
    "BuildCache",
    "build_transforms",
    "adapt_css",
    "adapt_css_for_replay",
    "normalize_media_features",
    "duplicate_interactive_pseudo_classes",
]


@dataclass(frozen=True)
class AdaptedCss:
    """Adapted text plus the sorted edits that produced it from the input."""

    css_text: str
    edits: tuple[Edit, ...] = ()


@dataclass
class BuildCache:
    """Per-replay memo of adapted stylesheets, keyed by input text and options."""

    adapted: dict[tuple[str, TransformOptions], AdaptedCss] = field(default_factory=dict)

    def get(self, css_text: str, options: TransformOptions) -> AdaptedCss | None:
        return self.adapted.get((css_text, options))

    def put(self, css_text: str, options: TransformOptions, result: AdaptedCss) -> None:
        self.adapted[(css_text, options)] = result


def build_transforms(options: TransformOptions) -> list[Transform]:
    """Instantiate the plugins enabled in *options*."""
    transforms: list[Transform] = []
    if options.media_features:
        transforms.append(MediaFeatureTransform())
    if options.pseudo_classes:
        transforms.append(PseudoClassTransform(options.interactive_pseudo_classes))
    return transforms


def adapt_css(
    css_text: str,
    options: TransformOptions | None = None,
    cache: BuildCache | None = None,
) -> AdaptedCss:
    """Run the enabled transforms over *css_text* in one parse."""
    if options is None:
        options = TransformOptions()
    if not options.enabled or not css_text:
        return AdaptedCss(css_text)
    if cache is not None:
        cached = cache.get(css_text, options)
        if cached is not None:
            return cached

    sheet = ParsedSheet(css_text)
    edits: list[Edit] = []
    for transform in build_transforms(options):
        edits.extend(transform.edits(sheet))
    new_text, applied = apply_edits(css_text, edits)
    logger.debug(
        "Adapted stylesheet: %d edit(s), %d -> %d chars",
        len(applied),
        len(css_text),
        len(new_text),
    )

    result = AdaptedCss(new_text, tuple(applied))
    if cache is not None:
        cache.put(css_text, options, result)
    return result


def adapt_css_for_replay(
    css_text: str,
    options: TransformOptions | None = None,
    cache: BuildCache | None = None,
) -> str:
    """Return *css_text* with all enabled replay adaptations applied."""
    return adapt_css(css_text, options, cache).css_text


def normalize_media_features(css_text: str) -> str:
    """Rewrite ``(min|max)-device-(width|height)`` media features to viewport features."""
    options = TransformOptions(pseudo_classes=False, media_features=True)
    return adapt_css(css_text, options).css_text


def duplicate_interactive_pseudo_classes(
    css_text: str, pseudo_classes: tuple[str, ...] = ("hover",)
) -> str:
    """Give every selector using an interactive pseudo-class an escaped-class twin."""
    options = TransformOptions(
        pseudo_classes=True,
        media_features=False,
        interactive_pseudo_classes=tuple(pseudo_classes),
    )
    return adapt_css(css_text, options).css_text
