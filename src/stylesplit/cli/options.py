"""Options shared by the commands that run replay adaptations."""

from __future__ import annotations

from typing import Callable

import click

from stylesplit.config import TransformOptions


def transform_options(command: Callable) -> Callable:
    """Add ``--no-hover``, ``--no-media`` and ``--pseudo-class`` to *command*."""
    command = click.option(
        "--pseudo-class",
        "pseudo_classes",
        multiple=True,
        default=("hover",),
        show_default=True,
        help="Interactive pseudo-class to duplicate (repeatable)",
    )(command)
    command = click.option(
        "--no-media", is_flag=True, help="Keep device media features as they are"
    )(command)
    command = click.option(
        "--no-hover", is_flag=True, help="Do not add escaped-class selectors"
    )(command)
    return command


def build_options(no_hover: bool, no_media: bool, pseudo_classes: tuple[str, ...]) -> TransformOptions:
    return TransformOptions(
        pseudo_classes=not no_hover,
        media_features=not no_media,
        interactive_pseudo_classes=tuple(pseudo_classes),
    )
