from __future__ import annotations

from dataclasses import dataclass

# Comment inserted between recovered fragments in the recorded css text.
SPLIT_MARKER = "/* rr_split */"


@dataclass(frozen=True)
class TransformOptions:
    """Which replay adaptations to run over a stylesheet."""

    pseudo_classes: bool = True
    media_features: bool = True
    interactive_pseudo_classes: tuple[str, ...] = ("hover",)

    @property
    def enabled(self) -> bool:
        return self.pseudo_classes or self.media_features

    @classmethod
    def disabled(cls) -> TransformOptions:
        return cls(pseudo_classes=False, media_features=False)


@dataclass(frozen=True)
class SplitConfig:
    marker: str = SPLIT_MARKER
    normalize_units: bool = True
    anchor_max_length: int = 64  # longest next-fragment prefix tried as an anchor
    search_slack: int = 1024  # extra normalized chars searched past the expected boundary
