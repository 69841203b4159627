"""CLI command: stylesplit adapt -- rewrite a stylesheet for replay."""

from __future__ import annotations

from pathlib import Path

import click

from stylesplit.cli.options import build_options, transform_options
from stylesplit.transforms import adapt_css_for_replay


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@transform_options
def adapt(cssfile: str, no_hover: bool, no_media: bool, pseudo_classes: tuple[str, ...]) -> None:
    """Print CSSFILE with device media features and hover selectors adapted for replay."""
    source = Path(cssfile).read_text(encoding="utf-8")
    options = build_options(no_hover, no_media, pseudo_classes)
    click.echo(adapt_css_for_replay(source, options), nl=False)
