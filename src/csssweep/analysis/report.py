"""Merge and rank per-file analysis results into final reports."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict
from typing import Any

from csssweep.model.report import AnalysisResult, DuplicatedSelector, SelectorOccurrence

__all__ = [
    "rank_by_occurrences",
    "dedupe_occurrences",
    "merge_results",
    "report_to_dict",
]


def rank_by_occurrences(occurrences: Iterable[SelectorOccurrence]) -> list[DuplicatedSelector]:
    """Count repeated occurrences and rank them, most frequent first.

    Records are sorted by selector (stably) and consecutive identical
    records collapsed. Ties in the final ranking keep that pre-sort order.
    """
    ranked: list[DuplicatedSelector] = []
    for occurrence in sorted(occurrences, key=lambda o: o.selector):
        last = ranked[-1] if ranked else None
        if last is not None and (last.selector, last.source_file) == (
            occurrence.selector,
            occurrence.source_file,
        ):
            ranked[-1] = DuplicatedSelector(last.selector, last.source_file, last.occurrences + 1)
        else:
            ranked.append(DuplicatedSelector(occurrence.selector, occurrence.source_file, 1))
    return sorted(ranked, key=lambda d: d.occurrences, reverse=True)


def dedupe_occurrences(occurrences: Iterable[SelectorOccurrence]) -> list[SelectorOccurrence]:
    """Drop repeated ``(selector, source_file)`` pairs, keeping first-seen order."""
    return list(dict.fromkeys(occurrences))


def merge_results(
    results: Iterable[Mapping[str, AnalysisResult]],
) -> dict[str, AnalysisResult]:
    """Merge several ``{css_file: AnalysisResult}`` maps into one.

    A file present in more than one map keeps the most recent result.
    """
    merged: dict[str, AnalysisResult] = {}
    for result in results:
        merged.update(result)
    return merged


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _camel_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {_camel(k): _camel_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_camel_keys(v) for v in value]
    return value


def report_to_dict(results: Mapping[str, AnalysisResult]) -> dict[str, Any]:
    """JSON-ready ``{css_file: {cssSelectors, nestedSelectors, ...}}`` report."""
    return {css_file: _camel_keys(asdict(result)) for css_file, result in results.items()}
