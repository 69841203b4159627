"""CLI command: stylesplit apply -- fill style text slots from marked css."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from stylesplit.cli.options import build_options, transform_options
from stylesplit.errors import SnapshotFormatError
from stylesplit.model import ElementNode
from stylesplit.splitting import apply_css_splits


@click.command()
@click.argument("marked_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--slots", type=click.IntRange(min=0), default=None, help="Number of text slots")
@click.option(
    "--node",
    "node_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Serialized <style> element (JSON) whose text slots are filled",
)
@click.option(
    "--allow-invalid",
    is_flag=True,
    help="Fragments may not be valid css on their own (markers inside rules)",
)
@transform_options
def apply(
    marked_file: str,
    slots: int | None,
    node_file: str | None,
    allow_invalid: bool,
    no_hover: bool,
    no_media: bool,
    pseudo_classes: tuple[str, ...],
) -> None:
    """Distribute the marked css in MARKED_FILE over style text slots.

    With --slots N prints the N slot contents as a JSON list; with --node
    prints the updated element as JSON.
    """
    if (slots is None) == (node_file is None):
        raise click.UsageError("Pass exactly one of --slots or --node")

    if node_file is not None:
        try:
            node = ElementNode.from_dict(json.loads(Path(node_file).read_text(encoding="utf-8")))
        except (json.JSONDecodeError, SnapshotFormatError) as exc:
            click.echo(f"Snapshot error: {exc}", err=True)
            sys.exit(1)
    else:
        node = ElementNode.style(slots)

    css_text = Path(marked_file).read_text(encoding="utf-8")
    options = build_options(no_hover, no_media, pseudo_classes)
    apply_css_splits(node, css_text, allow_invalid, options)

    if node_file is not None:
        click.echo(json.dumps(node.to_dict(), indent=2))
    else:
        click.echo(json.dumps([slot.text_content for slot in node.text_slots], indent=2))
