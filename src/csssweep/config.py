"""Run configuration for csssweep."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from csssweep.errors import ConfigError

# Mustache/handlebars placeholders and PHP-style processing instructions.
DEFAULT_STRIP_PATTERN = r"\{{2,3}[^{]+\}{2,3}|<\?[^?'\"]+\?>"

DEFAULT_NEST_LEVEL_THRESHOLD = 3
DEFAULT_MAX_EXTRACT_DEPTH = 64

# camelCase option names accepted in JSON config files.
_ALIASES: dict[str, str] = {
    "cssFileGlob": "css_file_glob",
    "cssFileGlobIgnore": "css_file_glob_ignore",
    "filesToSearchGlob": "files_to_search_glob",
    "filesToSearchGlobIgnore": "files_to_search_glob_ignore",
    "removeRegex": "remove_regex",
    "nestLevelThreshold": "nest_level_threshold",
    "stripPattern": "strip_pattern",
    "maxExtractDepth": "max_extract_depth",
}


def _as_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


@dataclass(frozen=True)
class SweepConfig:
    """Options shared by the indexing, analysis and pruning passes.

    Attributes:
        css_file_glob: Glob for the stylesheets to analyze or prune.
        css_file_glob_ignore: Globs excluded from ``css_file_glob``.
        files_to_search_glob: Glob for the template/source corpus.
        files_to_search_glob_ignore: Globs excluded from the corpus.
        remove_regex: Only selectors matching this pattern may be pruned.
        nest_level_threshold: Selectors with more segments are reported.
        strip_pattern: Placeholder pattern blanked out before quote extraction.
        max_extract_depth: Recursion bound for quoted-string extraction.
        compress: Write pruned stylesheets in compressed form.
        jobs: Worker threads used for per-file work.
    """

    css_file_glob: str = ""
    css_file_glob_ignore: tuple[str, ...] = ()
    files_to_search_glob: str = ""
    files_to_search_glob_ignore: tuple[str, ...] = ()
    remove_regex: str | None = None
    nest_level_threshold: int = DEFAULT_NEST_LEVEL_THRESHOLD
    strip_pattern: str | None = DEFAULT_STRIP_PATTERN
    max_extract_depth: int = DEFAULT_MAX_EXTRACT_DEPTH
    compress: bool = True
    jobs: int = 1

    def __post_init__(self) -> None:
        for name in ("nest_level_threshold", "max_extract_depth", "jobs"):
            value = getattr(self, name)
            # bool is an int subclass but never a valid count
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if not isinstance(self.compress, bool):
            raise ConfigError(f"compress must be true or false, got {self.compress!r}")
        for name in ("css_file_glob", "files_to_search_glob", "remove_regex", "strip_pattern"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {value!r}")
        if self.nest_level_threshold < 0:
            raise ConfigError("nest_level_threshold must be >= 0")
        if self.max_extract_depth < 1:
            raise ConfigError("max_extract_depth must be >= 1")
        if self.jobs < 1:
            raise ConfigError("jobs must be >= 1")
        for name in ("remove_regex", "strip_pattern"):
            pattern = getattr(self, name)
            if pattern:
                try:
                    re.compile(pattern)
                except re.error as exc:
                    raise ConfigError(f"{name} is not a valid regex: {exc}") from exc

    @property
    def remove_pattern(self) -> re.Pattern[str] | None:
        return re.compile(self.remove_regex) if self.remove_regex else None

    @property
    def strip_regex(self) -> re.Pattern[str] | None:
        return re.compile(self.strip_pattern) if self.strip_pattern else None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SweepConfig:
        """Build a config from a mapping with camelCase or snake_case keys."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown config option: {key!r}")
            if name.endswith("_ignore"):
                value = _as_tuple(value)
            kwargs[name] = value
        return cls(**kwargs)

    def merged(self, **overrides: Any) -> SweepConfig:
        """Return a copy with every non-None override applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        for key in ("css_file_glob_ignore", "files_to_search_glob_ignore"):
            if key in updates:
                if not updates[key]:
                    del updates[key]
                else:
                    updates[key] = _as_tuple(updates[key])
        return replace(self, **updates)


def load_config(path: str | Path) -> SweepConfig:
    """Read a JSON config file into a :class:`SweepConfig`."""
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config {config_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config {config_path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a JSON object")
    return SweepConfig.from_dict(data)
