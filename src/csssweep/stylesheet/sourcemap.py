"""Source map loading, position resolution, and generation.

Reading uses the ``sourcemap`` package. Writing emits a version 3 map with
base64 VLQ ``mappings``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import sourcemap

from csssweep.errors import FileReadError, SourceMapError
from csssweep.model.stylesheet import Position

if TYPE_CHECKING:
    from sourcemap.objects import SourceMapIndex

__all__ = [
    "load_source_map",
    "original_position",
    "resolve_source_file",
    "SourceMapBuilder",
    "OriginalPosition",
]

logger = logging.getLogger(__name__)

_BASE64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"


@dataclass(frozen=True)
class OriginalPosition:
    """A 0-based position in an original source, as stored in source maps."""

    source: str
    line: int
    column: int


def load_source_map(map_path: str | Path) -> SourceMapIndex | None:
    """Load the source map at *map_path*.

    A missing file is not an error and returns ``None``. Any other read
    failure raises :class:`FileReadError`; an undecodable map raises
    :class:`SourceMapError`.
    """
    path = Path(map_path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No source map at %s", path)
        return None
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(str(path), str(exc)) from exc
    try:
        return sourcemap.loads(raw)
    except (ValueError, KeyError, TypeError) as exc:
        raise SourceMapError(str(path), str(exc)) from exc


def original_position(
    consumer: SourceMapIndex | None, position: Position
) -> OriginalPosition | None:
    """Map a 1-based compiled *position* back through *consumer*.

    Uses the closest mapping at or before the column on the same line.
    Returns ``None`` when there is no consumer or nothing maps there.
    """
    if consumer is None:
        return None
    try:
        token = consumer.lookup(position.line - 1, max(position.column - 1, 0))
    except IndexError:
        return None
    if not token.src:
        return None
    return OriginalPosition(source=token.src, line=token.src_line, column=token.src_col)


def resolve_source_file(
    consumer: SourceMapIndex | None, position: Position, fallback: str
) -> str:
    """Return the original source file for *position*, else *fallback*."""
    origin = original_position(consumer, position)
    return origin.source if origin is not None else fallback


def _encode_vlq(value: int) -> str:
    vlq = ((-value) << 1) | 1 if value < 0 else value << 1
    encoded = ""
    while True:
        digit = vlq & 0b11111
        vlq >>= 5
        if vlq:
            digit |= 0b100000
        encoded += _BASE64[digit]
        if not vlq:
            return encoded


@dataclass
class SourceMapBuilder:
    """Collects generated -> original mappings and renders a v3 source map.

    All lines and columns passed to :meth:`add_mapping` are 0-based.
    """

    file: str = ""
    _sources: list[str] = field(default_factory=list)
    _mappings: list[tuple[int, int, int, int, int]] = field(default_factory=list)

    def _source_index(self, source: str) -> int:
        if source not in self._sources:
            self._sources.append(source)
        return self._sources.index(source)

    def add_mapping(
        self,
        generated_line: int,
        generated_column: int,
        source: str,
        original_line: int,
        original_column: int,
    ) -> None:
        self._mappings.append(
            (generated_line, generated_column, self._source_index(source), original_line, original_column)
        )

    @property
    def sources(self) -> list[str]:
        return list(self._sources)

    def mappings(self) -> str:
        """Encode the collected mappings as a ``mappings`` string."""
        ordered = sorted(set(self._mappings))
        lines: list[str] = []
        prev_gen_col = prev_source = prev_line = prev_column = 0
        for gen_line, gen_col, src, orig_line, orig_col in ordered:
            while len(lines) <= gen_line:
                lines.append("")
                prev_gen_col = 0
            segment = (
                _encode_vlq(gen_col - prev_gen_col)
                + _encode_vlq(src - prev_source)
                + _encode_vlq(orig_line - prev_line)
                + _encode_vlq(orig_col - prev_column)
            )
            lines[gen_line] = f"{lines[gen_line]},{segment}" if lines[gen_line] else segment
            prev_gen_col = gen_col
            prev_source, prev_line, prev_column = src, orig_line, orig_col
        return ";".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": 3,
            "file": self.file,
            "sources": self.sources,
            "names": [],
            "mappings": self.mappings(),
        }
