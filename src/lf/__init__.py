"""
lf: select files by glob patterns and aggregate their contents, with line and
token counts, into a file, stdout, or the clipboard.
"""

from lf.app import Deps, RunOptions, run_app
from lf.errors import (
    ClipboardError,
    ConfigError,
    InvalidPatternError,
    LfError,
    MetadataError,
    OutputError,
    ReadError,
)
from lf.output.aggregator import RunTotals

__all__ = [
    "ClipboardError",
    "ConfigError",
    "Deps",
    "InvalidPatternError",
    "LfError",
    "MetadataError",
    "OutputError",
    "ReadError",
    "RunOptions",
    "RunTotals",
    "run_app",
]
