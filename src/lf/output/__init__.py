"""Ordered aggregation of processed files into an output sink."""

from lf.output.aggregator import Aggregator, RunTotals, format_entry
from lf.output.clipboard import Clipboard, SystemClipboard
from lf.output.sinks import ClipboardSink, FileSink, Sink, StdoutSink, select_sink

__all__ = [
    "Aggregator",
    "Clipboard",
    "ClipboardSink",
    "FileSink",
    "RunTotals",
    "Sink",
    "StdoutSink",
    "SystemClipboard",
    "format_entry",
    "select_sink",
]
