"""
Error types raised by `lf`.

Every fatal error carries the offending path or pattern so the CLI can report
it. `ClipboardError` is the only one that a run recovers from.
"""

from __future__ import annotations

from pathlib import Path


class LfError(Exception):
    """Base class for all `lf` errors."""


class InvalidPatternError(LfError):
    """A glob is not valid after normalization."""

    def __init__(self, pattern: str, reason: str = "invalid glob pattern") -> None:
        super().__init__(f"{reason}: {pattern!r}")
        self.pattern = pattern


class _PathError(LfError):
    action: str = "failed on"

    def __init__(self, path: str | Path, detail: object = None) -> None:
        message = f"{self.action} {path}"
        if detail is not None:
            message += f": {detail}"
        super().__init__(message)
        self.path = Path(path)


class ReadError(_PathError):
    """A file could not be opened or decoded as text."""

    action = "Failed to read file"


class MetadataError(_PathError):
    """A file's size could not be read."""

    action = "Failed to get metadata for"


class OutputError(_PathError):
    """The output file could not be created or written."""

    action = "Failed to write output file"


class ConfigError(_PathError):
    """A config file exists but could not be parsed."""

    action = "Invalid config file"


class ClipboardError(LfError):
    """The system clipboard rejected the text."""
