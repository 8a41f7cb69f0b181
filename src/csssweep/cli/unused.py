"""CLI command: csssweep unused -- list selectors not found in the corpus."""

from __future__ import annotations

import click

from csssweep.analysis import analyze_css_files, unused_selectors_by_file
from csssweep.cli.common import (
    config_options,
    configure_logging,
    css_files_for,
    emit_json,
    fail,
    resolve_config,
    search_index_for,
)
from csssweep.errors import CssSweepError


@click.command()
@config_options
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write JSON to a file")
def unused(config_path, css_file_glob, css_file_glob_ignore, files_to_search_glob,
           files_to_search_glob_ignore, jobs, verbose, as_json, output) -> None:
    """Report class/id selectors that never appear in the searched files.

    Exits with code 1 when any unused selector is found.
    """
    configure_logging(verbose)
    try:
        config = resolve_config(
            config_path,
            css_file_glob=css_file_glob,
            css_file_glob_ignore=css_file_glob_ignore,
            files_to_search_glob=files_to_search_glob,
            files_to_search_glob_ignore=files_to_search_glob_ignore,
            jobs=jobs,
        )
        search_index = search_index_for(config)
        report = unused_selectors_by_file(search_index, analyze_css_files(css_files_for(config), config))
    except CssSweepError as exc:
        fail(exc)
        return

    if as_json or output:
        emit_json(report, output)
    else:
        total = 0
        for css_file, by_source in report.items():
            click.echo(f"{css_file}:")
            for source_file, selectors in by_source.items():
                click.echo(f"  {source_file}:")
                for selector in selectors:
                    click.echo(f"    {selector}")
                total += len(selectors)
        click.echo(f"Unused selectors: {total}")
    if report:
        raise SystemExit(1)
