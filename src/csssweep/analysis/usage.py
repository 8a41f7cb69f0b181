"""Decide which selectors are used according to a search index."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from csssweep.model.report import AnalysisResult, SelectorOccurrence, SelectorPartition
from csssweep.search.index import SearchIndex
from csssweep.selectors import get_sub_classes_and_ids

__all__ = [
    "is_selector_used",
    "classify_selectors",
    "unused_occurrences",
    "unused_selectors_by_file",
]


def is_selector_used(
    selector: str,
    index: SearchIndex,
    remove_pattern: re.Pattern[str] | None = None,
) -> bool:
    """Return True if *selector* should be kept.

    When *remove_pattern* is set, selectors that do not match it are exempt
    and always count as used. Otherwise a selector is used when any of its
    class/id tokens is in *index*; one with no tokens at all (``a``,
    ``:root``) is unused.
    """
    if remove_pattern is not None and not remove_pattern.search(selector):
        return True
    return any(token in index for token in get_sub_classes_and_ids(selector))


def classify_selectors(
    selectors: Iterable[str],
    index: SearchIndex,
    remove_pattern: re.Pattern[str] | None = None,
) -> SelectorPartition:
    """Split *selectors* into used and unused, preserving order within each."""
    used: list[str] = []
    unused: list[str] = []
    for selector in selectors:
        (used if is_selector_used(selector, index, remove_pattern) else unused).append(selector)
    return SelectorPartition(used_selectors=used, unused_selectors=unused)


def unused_occurrences(
    occurrences: Iterable[SelectorOccurrence], index: SearchIndex
) -> dict[str, list[str]]:
    """Group tokens missing from *index* by the source file they came from."""
    by_source: dict[str, list[str]] = {}
    for occurrence in occurrences:
        if occurrence.selector not in index:
            by_source.setdefault(occurrence.source_file, []).append(occurrence.selector)
    return by_source


def unused_selectors_by_file(
    index: SearchIndex, analyses: Mapping[str, AnalysisResult]
) -> dict[str, dict[str, list[str]]]:
    """``{css_file: {source_file: [token, ...]}}`` for every file with unused tokens."""
    report: dict[str, dict[str, list[str]]] = {}
    for css_file, analysis in analyses.items():
        unused = unused_occurrences(analysis.css_selectors, index)
        if unused:
            report[css_file] = unused
    return report
