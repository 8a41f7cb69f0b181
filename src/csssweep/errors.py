"""Error types raised by csssweep."""

from __future__ import annotations


class CssSweepError(Exception):
    """Base class for all csssweep errors."""


class ConfigError(CssSweepError):
    """Raised when configuration values are missing or invalid."""


class FileReadError(CssSweepError):
    """Raised when a corpus or CSS file cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class SourceMapError(CssSweepError):
    """Raised when a source map exists but cannot be decoded."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid source map {path}: {reason}")


class PruneError(CssSweepError):
    """Raised when writing a pruned stylesheet or its map fails."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write {path}: {reason}")
