"""CLI command: csssweep analyze -- report nesting and duplicate declarations."""

from __future__ import annotations

import click

from csssweep.analysis import analyze_css_files, report_to_dict
from csssweep.cli.common import (
    config_options,
    configure_logging,
    css_files_for,
    emit_json,
    fail,
    resolve_config,
)
from csssweep.errors import CssSweepError


@click.command()
@config_options
@click.option("--nest-threshold", "nest_level_threshold", type=int,
              help="Report selectors with more segments than this (default 3)")
@click.option("--json", "as_json", is_flag=True, help="Print the full report as JSON")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write JSON to a file")
def analyze(config_path, css_file_glob, css_file_glob_ignore, files_to_search_glob,
            files_to_search_glob_ignore, jobs, verbose, nest_level_threshold,
            as_json, output) -> None:
    """Analyze CSS files for deep nesting and duplicated declarations."""
    configure_logging(verbose)
    try:
        config = resolve_config(
            config_path,
            css_file_glob=css_file_glob,
            css_file_glob_ignore=css_file_glob_ignore,
            nest_level_threshold=nest_level_threshold,
            jobs=jobs,
        )
        results = analyze_css_files(css_files_for(config), config)
    except CssSweepError as exc:
        fail(exc)
        return

    if as_json or output:
        emit_json(report_to_dict(results), output)
        return

    for css_file, result in results.items():
        click.echo(f"{css_file}: {len(result.css_selectors)} selector(s)")
        if result.nested_selectors:
            click.echo(f"  Nested beyond {config.nest_level_threshold}:")
            for record in result.nested_selectors:
                click.echo(f"    [{record.nest_level}] {record.selector}  ({record.source_file})")
        if result.duplicated_declarations:
            click.echo("  Duplicate declarations:")
            for group in reversed(result.duplicated_declarations):
                selectors = " | ".join(", ".join(s) for s in group.selectors)
                click.echo(f"    {group.size}x {{{group.declarations}}}: {selectors}")
