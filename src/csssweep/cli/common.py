"""Options and helpers shared by the csssweep subcommands."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from csssweep.config import SweepConfig, load_config
from csssweep.errors import ConfigError, CssSweepError
from csssweep.files import find_files
from csssweep.search.index import SearchIndex, build_search_index

logger = logging.getLogger(__name__)


def configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options every subcommand understands."""
    options = [
        click.option("--config", "config_path", type=click.Path(exists=True), help="JSON config file"),
        click.option("--css", "css_file_glob", help="Glob of CSS files to inspect"),
        click.option("--css-ignore", "css_file_glob_ignore", multiple=True, help="Glob of CSS files to skip"),
        click.option("--search", "files_to_search_glob", help="Glob of files to search for identifiers"),
        click.option("--search-ignore", "files_to_search_glob_ignore", multiple=True, help="Glob of files not to search"),
        click.option("--jobs", "-j", type=int, help="Worker threads for per-file work"),
        click.option("--verbose", "-v", count=True, help="Log progress (-vv for debug)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def resolve_config(config_path: str | None, **overrides: Any) -> SweepConfig:
    base = load_config(config_path) if config_path else SweepConfig()
    return base.merged(**overrides)


def require(value: str, option: str) -> str:
    if not value:
        raise ConfigError(f"Missing {option} (pass it on the command line or in --config)")
    return value


def search_index_for(config: SweepConfig) -> SearchIndex:
    pattern = require(config.files_to_search_glob, "--search")
    files = find_files(pattern, config.files_to_search_glob_ignore)
    if not files:
        logger.warning("No files matched %s", pattern)
    return build_search_index(files, config)


def css_files_for(config: SweepConfig) -> list[str]:
    pattern = require(config.css_file_glob, "--css")
    files = find_files(pattern, config.css_file_glob_ignore)
    if not files:
        logger.warning("No CSS files matched %s", pattern)
    return files


def emit_json(data: Any, output: str | None) -> None:
    text = json.dumps(data, indent=2)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        click.echo(f"Wrote {output}")
    else:
        click.echo(text)


def fail(exc: CssSweepError) -> None:
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)
