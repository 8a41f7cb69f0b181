"""csssweep CLI entry point: Click group with subcommands."""

import click

from csssweep import __version__


@click.group()
@click.version_option(version=__version__, prog_name="csssweep")
def cli() -> None:
    """csssweep - find and prune dead CSS selectors."""


# Import and register subcommands
from csssweep.cli.analyze import analyze  # noqa: E402
from csssweep.cli.index import index  # noqa: E402
from csssweep.cli.prune import prune  # noqa: E402
from csssweep.cli.unused import unused  # noqa: E402

cli.add_command(index)
cli.add_command(analyze)
cli.add_command(unused)
cli.add_command(prune)
