"""CLI command: stylesplit split -- recover text node splits from serialized css."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from stylesplit.capture import StaticStyleSource, fragments_from_json, mark_css_splits
from stylesplit.config import SplitConfig
from stylesplit.errors import FragmentFormatError
from stylesplit.splitting import split_css_text


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.argument("fragments_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--no-unit-normalization",
    is_flag=True,
    help="Do not treat an authored 0 as equal to a serialized 0px",
)
@click.option("--json", "as_json", is_flag=True, help="Print the pieces as a JSON list")
def split(cssfile: str, fragments_file: str, no_unit_normalization: bool, as_json: bool) -> None:
    """Split the serialized css in CSSFILE along the authored fragments.

    FRAGMENTS_FILE is a JSON list holding the raw text of each text node of
    the <style> element.  Prints the css joined with split markers, or the
    pieces as JSON with --json.
    """
    css_text = Path(cssfile).read_text(encoding="utf-8")
    try:
        fragments = fragments_from_json(Path(fragments_file).read_text(encoding="utf-8"))
    except FragmentFormatError as exc:
        click.echo(f"Fragment error: {exc}", err=True)
        sys.exit(1)

    config = SplitConfig(normalize_units=not no_unit_normalization)
    if as_json:
        pieces = split_css_text(css_text, fragments, config=config)
        click.echo(json.dumps(pieces, indent=2))
        if len(pieces) != max(len(fragments), 1):
            click.echo(
                f"Warning: recovered {len(pieces)} of {len(fragments)} fragments", err=True
            )
    else:
        source = StaticStyleSource(css_text, fragments)
        click.echo(mark_css_splits(source, config), nl=False)
