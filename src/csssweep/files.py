"""File enumeration and reading helpers."""

from __future__ import annotations

import fnmatch
import glob
import logging
from collections.abc import Iterable
from pathlib import Path

from csssweep.errors import FileReadError

logger = logging.getLogger(__name__)


def _is_ignored(path: str, ignore: Iterable[str]) -> bool:
    posix = Path(path).as_posix()
    return any(fnmatch.fnmatch(posix, pattern) for pattern in ignore)


def find_files(pattern: str, ignore: Iterable[str] = ()) -> list[str]:
    """Return the files matching *pattern* (``**`` allowed), minus *ignore* globs.

    Directories are skipped. The result is sorted so runs are reproducible.
    """
    if not pattern:
        return []
    ignore = tuple(ignore)
    matches = [
        path
        for path in glob.glob(pattern, recursive=True)
        if Path(path).is_file() and not _is_ignored(path, ignore)
    ]
    logger.debug("Glob %s matched %d file(s)", pattern, len(matches))
    return sorted(matches)


def read_text(path: str | Path) -> str:
    """Read *path* as UTF-8, raising :class:`FileReadError` on any failure."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(str(path), str(exc)) from exc
