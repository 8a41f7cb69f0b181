"""CLI command: csssweep prune -- rewrite CSS files without unused selectors."""

from __future__ import annotations

import click

from csssweep.cli.common import (
    config_options,
    configure_logging,
    css_files_for,
    fail,
    resolve_config,
    search_index_for,
)
from csssweep.errors import CssSweepError
from csssweep.prune import prune_css_files


@click.command()
@config_options
@click.option("--remove-regex", help="Only selectors matching this regex may be removed")
@click.option("--compress/--pretty", default=None, help="Output style of rewritten CSS")
@click.option("--dry-run", is_flag=True, help="Report what would be removed without writing")
def prune(config_path, css_file_glob, css_file_glob_ignore, files_to_search_glob,
          files_to_search_glob_ignore, jobs, verbose, remove_regex, compress, dry_run) -> None:
    """Remove unused selectors from CSS files, overwriting them and their .map files.

    This cannot be undone. Keep the stylesheets under version control.
    """
    configure_logging(verbose)
    try:
        config = resolve_config(
            config_path,
            css_file_glob=css_file_glob,
            css_file_glob_ignore=css_file_glob_ignore,
            files_to_search_glob=files_to_search_glob,
            files_to_search_glob_ignore=files_to_search_glob_ignore,
            remove_regex=remove_regex,
            compress=compress,
            jobs=jobs,
        )
        search_index = search_index_for(config)
        results = prune_css_files(css_files_for(config), search_index, config, dry_run=dry_run)
    except CssSweepError as exc:
        fail(exc)
        return

    failures = 0
    for result in results:
        verb = "would remove" if dry_run else "removed"
        click.echo(
            f"{result.css_file}: {verb} {len(result.unused_selectors)} selector(s), "
            f"{result.rules_removed} rule(s)"
        )
        for selector in result.unused_selectors:
            click.echo(f"  {selector}")
        if result.failed:
            failures += 1
            click.echo(f"  FAILED: {result.error}", err=True)

    if failures:
        click.echo(f"{failures} file(s) could not be written", err=True)
        raise SystemExit(1)
