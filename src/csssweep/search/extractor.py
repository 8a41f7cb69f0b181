"""Heuristic extraction of candidate identifiers from arbitrary text.

The corpus may be HTML, templates, PHP, JavaScript or anything else; none of
it is parsed. Instead every quoted string is pulled out, split on
punctuation, and searched for class/id-looking tokens. This over-collects on
purpose so that real usages are not missed.

Examples::

    <div id="myId" class="myClass">   ->  ["myId", "myClass"]
    Then I said "Hello old 'friend'"  ->  ["Hello", "old", "friend"]
"""

from __future__ import annotations

import re

from csssweep.config import DEFAULT_MAX_EXTRACT_DEPTH, DEFAULT_STRIP_PATTERN
from csssweep.selectors import get_sub_classes_and_ids

__all__ = ["extract_candidates", "DEFAULT_STRIP_RE"]

DEFAULT_STRIP_RE = re.compile(DEFAULT_STRIP_PATTERN)

_HAS_QUOTES_RE = re.compile(r"['\"].*['\"]")
_COMMENTS_RE = re.compile(r"//[^\r\n]*|/\*[\s\S]*?\*/")
# A quoted string; the lookahead/backreference pair consumes an escaping
# backslash together with the character it escapes.
_QUOTED_RE = re.compile(r"([\"'])(?:(?=(\\?))\2[\s\S])*?\1")
_SPLIT_RE = re.compile(r"[\"'<>?:=\s]")


def _quoted_pieces(text: str) -> list[str]:
    pieces: list[str] = []
    for match in _QUOTED_RE.finditer(text):
        quoted = match.group(0)
        pieces.extend(_SPLIT_RE.split(quoted))
        pieces.extend(get_sub_classes_and_ids(quoted))
    return [p for p in pieces if p]


def extract_candidates(
    text: str | None,
    strip_pattern: re.Pattern[str] | None = DEFAULT_STRIP_RE,
    max_depth: int = DEFAULT_MAX_EXTRACT_DEPTH,
) -> list[str]:
    """Return every candidate identifier found inside quotes in *text*.

    Text without any quoted substring is returned whole. Recursion stops at
    *max_depth*, where the remaining text is returned as a single candidate.
    """
    if not text:
        return []
    if max_depth <= 0 or not _HAS_QUOTES_RE.search(text):
        return [text]

    cleaned = _COMMENTS_RE.sub("", text)
    if strip_pattern is not None:
        cleaned = strip_pattern.sub(" ", cleaned)

    candidates: list[str] = []
    for piece in _quoted_pieces(cleaned):
        candidates.extend(extract_candidates(piece, strip_pattern, max_depth - 1))
    return candidates
