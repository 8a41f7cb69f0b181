"""Remove unused selectors from stylesheets and regenerate their source maps.

Pruning overwrites the CSS file and its ``.map`` in place. It cannot be
undone; keep the inputs under version control.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from csssweep.analysis.usage import classify_selectors
from csssweep.config import SweepConfig
from csssweep.errors import PruneError
from csssweep.files import read_text
from csssweep.model.report import PruneResult
from csssweep.model.stylesheet import Node, Rule, Stylesheet
from csssweep.search.index import SearchIndex
from csssweep.stylesheet.parser import parse_stylesheet
from csssweep.stylesheet.serializer import stringify
from csssweep.stylesheet.sourcemap import load_source_map

if TYPE_CHECKING:
    from sourcemap.objects import SourceMapIndex

__all__ = [
    "PrunedStylesheet",
    "PrunedCss",
    "prune_stylesheet",
    "prune_css_text",
    "prune_css_file",
    "prune_css_files",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrunedStylesheet:
    stylesheet: Stylesheet
    unused_selectors: list[str] = field(default_factory=list)
    rules_removed: int = 0


@dataclass(frozen=True)
class PrunedCss:
    code: str
    map_json: str
    unused_selectors: list[str]
    rules_removed: int


def prune_stylesheet(
    stylesheet: Stylesheet,
    index: SearchIndex,
    remove_pattern: re.Pattern[str] | None = None,
) -> PrunedStylesheet:
    """Drop or narrow top-level rules whose selectors are unused.

    A rule left with no used selector is removed together with its
    declarations. Other nodes (``@media`` blocks included) pass through
    unchanged.
    """
    nodes: list[Node] = []
    unused: list[str] = []
    removed = 0
    for node in stylesheet.nodes:
        if not isinstance(node, Rule):
            nodes.append(node)
            continue
        partition = classify_selectors(node.selectors, index, remove_pattern)
        unused.extend(partition.unused_selectors)
        if partition.all_unused:
            removed += 1
            continue
        if partition.unused_selectors:
            node = node.with_selectors(partition.used_selectors)
        nodes.append(node)
    return PrunedStylesheet(
        stylesheet=Stylesheet(source=stylesheet.source, nodes=nodes),
        unused_selectors=unused,
        rules_removed=removed,
    )


def prune_css_text(
    css_file: str,
    text: str,
    index: SearchIndex,
    remove_pattern: re.Pattern[str] | None = None,
    compress: bool = True,
    consumer: SourceMapIndex | None = None,
) -> PrunedCss:
    """Prune CSS *text* and return the new code, its map, and what was dropped."""
    pruned = prune_stylesheet(parse_stylesheet(text, source=css_file), index, remove_pattern)
    rendered = stringify(
        pruned.stylesheet,
        compress=compress,
        source_map=True,
        consumer=consumer,
        map_url=Path(css_file).name + ".map",
    )
    return PrunedCss(
        code=rendered.code,
        map_json=json.dumps(rendered.map),
        unused_selectors=pruned.unused_selectors,
        rules_removed=pruned.rules_removed,
    )


def _write(path: str, content: str) -> None:
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError as exc:
        raise PruneError(path, str(exc)) from exc


def prune_css_file(
    css_file: str,
    index: SearchIndex,
    config: SweepConfig | None = None,
    dry_run: bool = False,
) -> PruneResult:
    """Prune *css_file* in place and rewrite ``<css_file>.map``.

    Read failures propagate. Write failures are captured in the returned
    result so callers can keep going with other files.
    """
    config = config or SweepConfig()
    map_file = css_file + ".map"
    pruned = prune_css_text(
        css_file,
        read_text(css_file),
        index,
        config.remove_pattern,
        compress=config.compress,
        consumer=load_source_map(map_file),
    )
    result = PruneResult(
        css_file=css_file,
        unused_selectors=pruned.unused_selectors,
        rules_removed=pruned.rules_removed,
    )
    if dry_run:
        return result

    # The map is only written once the CSS it describes is on disk.
    try:
        _write(css_file, pruned.code)
        _write(map_file, pruned.map_json)
    except PruneError as exc:
        logger.error("%s", exc)
        result.error = str(exc)
        return result
    result.written = True
    logger.info(
        "Pruned %s: %d selector(s) unused, %d rule(s) removed",
        css_file, len(result.unused_selectors), result.rules_removed,
    )
    return result


def prune_css_files(
    css_files: Iterable[str],
    index: SearchIndex,
    config: SweepConfig | None = None,
    dry_run: bool = False,
) -> list[PruneResult]:
    """Prune every file; one file failing to write does not stop the rest."""
    config = config or SweepConfig()
    css_files = list(css_files)

    def _prune(css_file: str) -> PruneResult:
        return prune_css_file(css_file, index, config, dry_run=dry_run)

    if config.jobs > 1 and len(css_files) > 1:
        with ThreadPoolExecutor(max_workers=config.jobs) as pool:
            return list(pool.map(_prune, css_files))
    return [_prune(f) for f in css_files]
