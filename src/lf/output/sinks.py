"""
Output sinks. Exactly one is chosen per run, before any file is read.

File and stdout sinks stream each entry as it is written. The clipboard sink
buffers everything and commits once on `close()`; if the clipboard fails, the
buffer is printed to stdout instead.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Protocol, TextIO

from lf.errors import ClipboardError, OutputError
from lf.output.clipboard import Clipboard

log = logging.getLogger(__name__)


class Sink(Protocol):
    def write(self, text: str) -> None: ...

    def close(self) -> None: ...

    def abort(self) -> None:
        """Stop after a failed run. Streamed output stays; buffered output is dropped."""
        ...


class FileSink:
    def __init__(self, path: Path) -> None:
        self.path = path
        try:
            self._fh: TextIO = path.open("w", encoding="utf-8", newline="\n")
        except OSError as e:
            raise OutputError(path, e) from e

    def write(self, text: str) -> None:
        try:
            self._fh.write(text)
        except OSError as e:
            raise OutputError(self.path, e) from e

    def close(self) -> None:
        if self._fh.closed:
            return
        try:
            self._fh.close()
        except OSError as e:
            raise OutputError(self.path, e) from e

    def abort(self) -> None:
        if not self._fh.closed:
            self._fh.close()


class StdoutSink:
    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def write(self, text: str) -> None:
        self.stream.write(text)

    def close(self) -> None:
        self.stream.flush()

    def abort(self) -> None:
        self.stream.flush()


class ClipboardSink:
    def __init__(self, clipboard: Clipboard, fallback: TextIO) -> None:
        self.clipboard = clipboard
        self.fallback = fallback
        self._lock = threading.Lock()
        self._parts: list[str] = []

    def write(self, text: str) -> None:
        with self._lock:
            self._parts.append(text)

    def getvalue(self) -> str:
        with self._lock:
            return "".join(self._parts)

    def close(self) -> None:
        content = self.getvalue()
        try:
            self.clipboard.set_text(content)
        except ClipboardError as e:
            log.warning("Could not copy to clipboard (%s); printing instead", e)
            self.fallback.write(content)
            self.fallback.flush()

    def abort(self) -> None:
        with self._lock:
            self._parts.clear()


def select_sink(
    output: Path | None,
    no_clipboard: bool,
    clipboard: Clipboard | None,
    stdout: TextIO,
) -> Sink:
    """
    An explicit output file wins; otherwise stdout if the clipboard is turned
    off (or there is no clipboard); otherwise the clipboard.
    """
    if output is not None:
        return FileSink(output)
    if no_clipboard or clipboard is None:
        return StdoutSink(stdout)
    return ClipboardSink(clipboard, fallback=stdout)
