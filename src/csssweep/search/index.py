"""Search index: how often each candidate identifier appears in the corpus."""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor

from csssweep.config import DEFAULT_MAX_EXTRACT_DEPTH, SweepConfig
from csssweep.files import read_text
from csssweep.search.extractor import DEFAULT_STRIP_RE, extract_candidates

__all__ = ["SearchIndex", "index_from_text", "build_search_index"]

logger = logging.getLogger(__name__)

_ATTRIBUTE_RE = re.compile(r"(?:class=|id=)([\w\-]+)")


class SearchIndex:
    """Read-only mapping of identifier -> occurrence count.

    Keys are exact, case-sensitive strings. Only presence matters when
    deciding usage; counts are kept for reporting.
    """

    def __init__(self, counts: dict[str, int] | None = None) -> None:
        self._counts: Counter[str] = Counter(counts or {})

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> SearchIndex:
        index = cls()
        index._counts.update(tokens)
        return index

    @classmethod
    def merge_all(cls, indexes: Iterable[SearchIndex]) -> SearchIndex:
        """Sum any number of indexes; order does not matter."""
        merged = cls()
        for index in indexes:
            merged._counts.update(index._counts)
        return merged

    def most_common(self, n: int | None = None) -> list[tuple[str, int]]:
        return self._counts.most_common(n)

    def as_dict(self) -> dict[str, int]:
        return dict(self._counts)

    def __contains__(self, key: object) -> bool:
        return key in self._counts

    def __getitem__(self, key: str) -> int:
        if key not in self._counts:
            raise KeyError(key)
        return self._counts[key]

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SearchIndex):
            return self._counts == other._counts
        if isinstance(other, dict):
            return dict(self._counts) == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"SearchIndex(keys={len(self._counts)})"


def index_from_text(
    text: str | None,
    strip_pattern: re.Pattern[str] | None = DEFAULT_STRIP_RE,
    max_depth: int = DEFAULT_MAX_EXTRACT_DEPTH,
) -> SearchIndex:
    """Build an index from one file's contents.

    Both quoted-string candidates and bare ``class=foo`` / ``id=foo``
    attributes feed the same counts.
    """
    if not text:
        return SearchIndex()
    tokens = extract_candidates(text, strip_pattern, max_depth)
    tokens.extend(_ATTRIBUTE_RE.findall(text))
    return SearchIndex.from_tokens(tokens)


def build_search_index(
    paths: Iterable[str],
    config: SweepConfig | None = None,
) -> SearchIndex:
    """Read every corpus file and merge the per-file indexes by summation.

    Any read failure is fatal and propagates as :class:`FileReadError`.
    """
    config = config or SweepConfig()
    strip_pattern = config.strip_regex
    paths = list(paths)

    def _index_file(path: str) -> SearchIndex:
        return index_from_text(read_text(path), strip_pattern, config.max_extract_depth)

    if config.jobs > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=config.jobs) as pool:
            partials = list(pool.map(_index_file, paths))
    else:
        partials = [_index_file(path) for path in paths]

    index = SearchIndex.merge_all(partials)
    logger.info("Indexed %d file(s): %d candidate identifier(s)", len(paths), len(index))
    return index
