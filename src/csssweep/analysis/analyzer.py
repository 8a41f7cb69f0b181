"""Per-file CSS analysis: selectors, nesting depth, and duplicate declarations.

For every style rule (after flattening ``@media`` and friends) the analyzer

* attributes the rule to its original source file through the source map,
* records selectors nested deeper than the configured threshold,
* folds the rule's declarations into a map keyed by the canonical
  declaration set, and
* collects the class/id tokens of every selector.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from csssweep.analysis.flatten import flatten_rules
from csssweep.analysis.report import dedupe_occurrences, merge_results, rank_by_occurrences
from csssweep.config import DEFAULT_NEST_LEVEL_THRESHOLD, SweepConfig
from csssweep.files import read_text
from csssweep.model.report import (
    AnalysisResult,
    DuplicateDeclarationGroup,
    NestedSelectorRecord,
    SelectorOccurrence,
)
from csssweep.model.stylesheet import BodyNode, Declaration
from csssweep.selectors import get_sub_classes_and_ids, nest_level
from csssweep.stylesheet.parser import parse_stylesheet
from csssweep.stylesheet.sourcemap import load_source_map, resolve_source_file

if TYPE_CHECKING:
    from sourcemap.objects import SourceMapIndex

__all__ = [
    "declaration_key",
    "analyze_css",
    "analyze_css_file",
    "analyze_css_files",
]

logger = logging.getLogger(__name__)


def declaration_key(declarations: Iterable[BodyNode]) -> str:
    """Canonical key for a declaration set: sorted ``property:value`` joined by ``;``.

    Comments are ignored. Values compare as literal strings, so vendor
    prefixed variants produce distinct keys.
    """
    return ";".join(sorted(d.key for d in declarations if isinstance(d, Declaration)))


def _duplicate_groups(by_key: dict[str, list[list[str]]]) -> list[DuplicateDeclarationGroup]:
    groups = [
        DuplicateDeclarationGroup(declarations=key, selectors=selectors)
        for key, selectors in by_key.items()
        if len(selectors) > 1
    ]
    return sorted(groups, key=lambda g: g.size)


def analyze_css(
    css_file: str,
    text: str,
    consumer: SourceMapIndex | None = None,
    nest_level_threshold: int = DEFAULT_NEST_LEVEL_THRESHOLD,
) -> AnalysisResult:
    """Analyze the CSS *text* of *css_file*.

    *consumer* is the parsed source map for the file, if any.
    """
    stylesheet = parse_stylesheet(text, source=css_file)
    occurrences: list[SelectorOccurrence] = []
    nested: list[NestedSelectorRecord] = []
    by_key: dict[str, list[list[str]]] = {}

    for rule in flatten_rules(stylesheet.nodes):
        source_file = resolve_source_file(consumer, rule.position, css_file)

        for selector in rule.selectors:
            level = nest_level(selector)
            if level > nest_level_threshold:
                nested.append(NestedSelectorRecord(selector, source_file, level))

        by_key.setdefault(declaration_key(rule.declarations), []).append(list(rule.selectors))

        for selector in rule.selectors:
            occurrences.extend(
                SelectorOccurrence(token, source_file)
                for token in get_sub_classes_and_ids(selector)
            )

    return AnalysisResult(
        css_selectors=dedupe_occurrences(occurrences),
        nested_selectors=sorted(nested, key=lambda r: r.nest_level, reverse=True),
        duplicated_selectors=rank_by_occurrences(occurrences),
        duplicated_declarations=_duplicate_groups(by_key),
    )


def analyze_css_file(css_file: str, config: SweepConfig | None = None) -> AnalysisResult:
    """Read *css_file* and its optional ``<css_file>.map`` and analyze them."""
    config = config or SweepConfig()
    consumer = load_source_map(css_file + ".map")
    result = analyze_css(css_file, read_text(css_file), consumer, config.nest_level_threshold)
    logger.info(
        "Analyzed %s: %d selector(s), %d nested, %d duplicate declaration group(s)",
        css_file,
        len(result.css_selectors),
        len(result.nested_selectors),
        len(result.duplicated_declarations),
    )
    return result


def analyze_css_files(
    css_files: Iterable[str], config: SweepConfig | None = None
) -> dict[str, AnalysisResult]:
    """Analyze every file; returns ``{css_file: AnalysisResult}`` in input order."""
    config = config or SweepConfig()
    css_files = list(css_files)

    def _analyze(css_file: str) -> dict[str, AnalysisResult]:
        return {css_file: analyze_css_file(css_file, config)}

    if config.jobs > 1 and len(css_files) > 1:
        with ThreadPoolExecutor(max_workers=config.jobs) as pool:
            partials = list(pool.map(_analyze, css_files))
    else:
        partials = [_analyze(f) for f in css_files]
    return merge_results(partials)
