"""Tests for per-file CSS analysis."""

import json

import pytest
import sourcemap

from csssweep.analysis import analyze_css, analyze_css_file, analyze_css_files, declaration_key
from csssweep.config import SweepConfig
from csssweep.errors import FileReadError
from csssweep.model import (
    Comment,
    Declaration,
    DuplicateDeclarationGroup,
    NestedSelectorRecord,
    SelectorOccurrence,
)

BUTTONS_MAP = {
    "version": 3,
    "file": "style.css",
    "sources": ["src/_buttons.scss"],
    "names": [],
    "mappings": "AAAA",
}


# ---------------------------------------------------------------------------
# Declaration keys
# ---------------------------------------------------------------------------


class TestDeclarationKey:
    def test_sorted_and_joined(self):
        decls = [Declaration("margin", "0"), Declaration("color", "red")]
        assert declaration_key(decls) == "color:red;margin:0"

    def test_comments_ignored(self):
        decls = [Comment(" x "), Declaration("color", "red")]
        assert declaration_key(decls) == "color:red"

    def test_vendor_values_distinct(self):
        a = declaration_key([Declaration("display", "-webkit-box")])
        b = declaration_key([Declaration("display", "box")])
        assert a != b


# ---------------------------------------------------------------------------
# Nested selectors
# ---------------------------------------------------------------------------


class TestNestedSelectors:
    def test_three_segments_not_flagged(self):
        result = analyze_css("style.css", "a b c { color: red }")
        assert result.nested_selectors == []

    def test_four_segments_flagged(self):
        result = analyze_css("style.css", "a b c d { color: red }")
        assert result.nested_selectors == [NestedSelectorRecord("a b c d", "style.css", 4)]

    def test_sorted_by_level_descending(self):
        css = "a b c d { color: red } a b c d e f { color: red } a b c d e { color: red }"
        result = analyze_css("style.css", css)
        assert [r.nest_level for r in result.nested_selectors] == [6, 5, 4]

    def test_custom_threshold(self):
        result = analyze_css("style.css", ".a .b { color: red }", nest_level_threshold=1)
        assert result.nested_selectors[0].nest_level == 2

    def test_selectors_inside_media_flagged(self):
        result = analyze_css("style.css", "@media print { a b c d { color: red } }")
        assert len(result.nested_selectors) == 1


# ---------------------------------------------------------------------------
# Duplicate declarations
# ---------------------------------------------------------------------------


class TestDuplicateDeclarations:
    def test_reordered_declarations_grouped(self):
        css = ".x { color: red; margin: 0 } .y { margin: 0; color: red }"
        result = analyze_css("style.css", css)
        assert result.duplicated_declarations == [
            DuplicateDeclarationGroup("color:red;margin:0", [[".x"], [".y"]])
        ]

    def test_comments_do_not_prevent_grouping(self):
        css = ".x { /* c */ color: red } .y { color: red }"
        result = analyze_css("style.css", css)
        assert len(result.duplicated_declarations) == 1

    def test_unique_declarations_dropped(self):
        result = analyze_css("style.css", ".x { color: red } .y { color: blue }")
        assert result.duplicated_declarations == []

    def test_selector_lists_kept_per_rule(self):
        css = ".a, .b { color: red } .c { color: red }"
        group = analyze_css("style.css", css).duplicated_declarations[0]
        assert group.selectors == [[".a", ".b"], [".c"]]

    def test_sorted_by_group_size_ascending(self):
        css = (
            ".a { color: red } .b { color: red } .c { color: red }"
            ".d { color: blue } .e { color: blue }"
        )
        groups = analyze_css("style.css", css).duplicated_declarations
        assert [g.size for g in groups] == [2, 3]


# ---------------------------------------------------------------------------
# Selector occurrences
# ---------------------------------------------------------------------------


class TestSelectorOccurrences:
    def test_tokens_deduplicated(self):
        result = analyze_css("style.css", ".a .b { color: red } .a { color: blue }")
        assert result.css_selectors == [
            SelectorOccurrence("a", "style.css"),
            SelectorOccurrence("b", "style.css"),
        ]

    def test_duplicated_selectors_ranked(self):
        result = analyze_css("style.css", ".a .b { color: red } .a { color: blue }")
        ranked = [(d.selector, d.occurrences) for d in result.duplicated_selectors]
        assert ranked == [("a", 2), ("b", 1)]

    def test_element_selectors_have_no_tokens(self):
        assert analyze_css("style.css", "a, p { color: red }").css_selectors == []

    def test_attributed_through_source_map(self):
        consumer = sourcemap.loads(json.dumps(BUTTONS_MAP))
        result = analyze_css("style.css", ".btn { color: red }\n.other { color: blue }", consumer)
        assert result.css_selectors == [
            SelectorOccurrence("btn", "src/_buttons.scss"),
            SelectorOccurrence("other", "style.css"),
        ]


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


class TestAnalyzeFiles:
    def test_without_map(self, tmp_path):
        css = tmp_path / "style.css"
        css.write_text(".btn { color: red }", encoding="utf-8")
        result = analyze_css_file(str(css))
        assert result.css_selectors == [SelectorOccurrence("btn", str(css))]

    def test_with_companion_map(self, tmp_path):
        css = tmp_path / "style.css"
        css.write_text(".btn { color: red }", encoding="utf-8")
        (tmp_path / "style.css.map").write_text(json.dumps(BUTTONS_MAP), encoding="utf-8")
        result = analyze_css_file(str(css))
        assert result.css_selectors == [SelectorOccurrence("btn", "src/_buttons.scss")]

    def test_threshold_from_config(self, tmp_path):
        css = tmp_path / "style.css"
        css.write_text(".a .b { color: red }", encoding="utf-8")
        result = analyze_css_file(str(css), SweepConfig(nest_level_threshold=1))
        assert len(result.nested_selectors) == 1

    def test_missing_css_is_fatal(self, tmp_path):
        with pytest.raises(FileReadError):
            analyze_css_file(str(tmp_path / "missing.css"))

    def test_unreadable_map_is_fatal(self, tmp_path):
        css = tmp_path / "style.css"
        css.write_text(".a { color: red }", encoding="utf-8")
        (tmp_path / "style.css.map").mkdir()
        with pytest.raises(FileReadError, match="style.css.map"):
            analyze_css_file(str(css))

    @pytest.mark.parametrize("jobs", [1, 3])
    def test_many_files_keyed_by_path(self, tmp_path, jobs):
        paths = []
        for name in ("a", "b", "c"):
            path = tmp_path / f"{name}.css"
            path.write_text(f".{name} {{ color: red }}", encoding="utf-8")
            paths.append(str(path))
        results = analyze_css_files(paths, SweepConfig(jobs=jobs))
        assert list(results) == paths
        assert results[paths[1]].css_selectors == [SelectorOccurrence("b", paths[1])]
