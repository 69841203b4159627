"""stylesplit CLI entry point: Click group with subcommands."""

import logging

import click

from stylesplit import __version__


@click.group()
@click.version_option(version=__version__, prog_name="stylesplit")
@click.option("-v", "--verbose", is_flag=True, help="Log debug details to stderr")
def cli(verbose: bool) -> None:
    """stylesplit - recover and re-apply <style> text node splits for session replay."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from stylesplit.cli.adapt import adapt  # noqa: E402
from stylesplit.cli.apply import apply  # noqa: E402
from stylesplit.cli.split import split  # noqa: E402

cli.add_command(adapt)
cli.add_command(split)
cli.add_command(apply)
