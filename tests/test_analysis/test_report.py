"""Tests for report ranking and merging."""

import json

from csssweep.analysis import (
    analyze_css,
    dedupe_occurrences,
    merge_results,
    rank_by_occurrences,
    report_to_dict,
)
from csssweep.model import AnalysisResult, DuplicatedSelector, SelectorOccurrence


def _occ(selector, source="s.css"):
    return SelectorOccurrence(selector, source)


class TestRankByOccurrences:
    def test_descending_counts(self):
        ranked = rank_by_occurrences([_occ("b"), _occ("a"), _occ("b"), _occ("c"), _occ("b")])
        assert ranked[0] == DuplicatedSelector("b", "s.css", 3)
        assert [d.occurrences for d in ranked] == [3, 1, 1]

    def test_ties_keep_selector_order(self):
        ranked = rank_by_occurrences([_occ("c"), _occ("a"), _occ("b")])
        assert [d.selector for d in ranked] == ["a", "b", "c"]

    def test_sources_counted_separately(self):
        ranked = rank_by_occurrences([_occ("a", "x.scss"), _occ("a", "x.scss"), _occ("b", "y.scss")])
        assert ranked == [
            DuplicatedSelector("a", "x.scss", 2),
            DuplicatedSelector("b", "y.scss", 1),
        ]

    def test_empty(self):
        assert rank_by_occurrences([]) == []


class TestDedupe:
    def test_first_seen_order(self):
        occurrences = [_occ("b"), _occ("a"), _occ("b"), _occ("a", "other.css")]
        assert dedupe_occurrences(occurrences) == [_occ("b"), _occ("a"), _occ("a", "other.css")]


class TestMergeAndSerialize:
    def test_merge_results(self):
        merged = merge_results([{"a.css": AnalysisResult()}, {"b.css": AnalysisResult()}])
        assert list(merged) == ["a.css", "b.css"]

    def test_report_keys(self):
        report = report_to_dict({"s.css": analyze_css("s.css", "a b c d .x { color: red }")})
        entry = report["s.css"]
        assert set(entry) == {
            "cssSelectors",
            "nestedSelectors",
            "duplicatedSelectors",
            "duplicatedDeclarations",
        }
        assert entry["cssSelectors"] == [{"selector": "x", "sourceFile": "s.css"}]
        assert entry["nestedSelectors"][0]["nestLevel"] == 5
        json.dumps(report)
