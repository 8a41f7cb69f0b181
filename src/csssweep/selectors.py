"""Class and id token extraction from selector strings."""

from __future__ import annotations

import re

__all__ = ["get_sub_classes_and_ids", "nest_level", "normalize_selector"]

# A sigil followed by everything up to the next combinator, pseudo, attribute,
# quote, comma or whitespace boundary.
_SUB_SELECTOR_RE = re.compile(r"[.#][^.#+>~\[:\"',\f\n\r\t\v\x85 ]+")


def get_sub_classes_and_ids(text: str | None) -> list[str]:
    """Return every ``.class`` / ``#id`` identifier in *text*, sigil stripped.

    Classes and ids share one namespace: ``".btn#main"`` gives
    ``["btn", "main"]``.
    """
    if not text:
        return []
    return [match[1:] for match in _SUB_SELECTOR_RE.findall(text)]


def normalize_selector(selector: str) -> str:
    """Collapse whitespace runs so segment counting is layout independent."""
    return " ".join(selector.split())


def nest_level(selector: str) -> int:
    """Number of space-separated segments in *selector*."""
    return len(normalize_selector(selector).split(" "))
