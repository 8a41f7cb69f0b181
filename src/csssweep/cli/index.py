"""CLI command: csssweep index -- build the identifier search index."""

from __future__ import annotations

import click

from csssweep.cli.common import (
    config_options,
    configure_logging,
    emit_json,
    fail,
    resolve_config,
    search_index_for,
)
from csssweep.errors import CssSweepError


@click.command()
@config_options
@click.option("--top", default=20, show_default=True, help="Show the N most common identifiers")
@click.option("--json", "as_json", is_flag=True, help="Print the whole index as JSON")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write JSON to a file")
def index(config_path, css_file_glob, css_file_glob_ignore, files_to_search_glob,
          files_to_search_glob_ignore, jobs, verbose, top, as_json, output) -> None:
    """Build the search index of candidate identifiers from the corpus."""
    configure_logging(verbose)
    try:
        config = resolve_config(
            config_path,
            files_to_search_glob=files_to_search_glob,
            files_to_search_glob_ignore=files_to_search_glob_ignore,
            jobs=jobs,
        )
        search_index = search_index_for(config)
    except CssSweepError as exc:
        fail(exc)
        return

    if as_json or output:
        emit_json(search_index.as_dict(), output)
        return

    click.echo(f"Identifiers: {len(search_index)}")
    for identifier, count in search_index.most_common(top):
        click.echo(f"  {count:>6}  {identifier}")
