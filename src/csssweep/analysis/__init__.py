from csssweep.analysis.analyzer import (
    analyze_css,
    analyze_css_file,
    analyze_css_files,
    declaration_key,
)
from csssweep.analysis.flatten import flatten_rules
from csssweep.analysis.report import (
    dedupe_occurrences,
    merge_results,
    rank_by_occurrences,
    report_to_dict,
)
from csssweep.analysis.usage import (
    classify_selectors,
    is_selector_used,
    unused_occurrences,
    unused_selectors_by_file,
)

__all__ = [
    "analyze_css",
    "analyze_css_file",
    "analyze_css_files",
    "declaration_key",
    "flatten_rules",
    "dedupe_occurrences",
    "merge_results",
    "rank_by_occurrences",
    "report_to_dict",
    "classify_selectors",
    "is_selector_used",
    "unused_occurrences",
    "unused_selectors_by_file",
]
