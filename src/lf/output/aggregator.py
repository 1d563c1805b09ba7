"""
Concurrent processing with ordered output.

Each candidate file is processed by its own task in a thread pool. Every task
stores its result in a pre-sized list at the file's position in the candidate
list, so output order and totals never depend on which task finishes first.
The run fails fast on the first error.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import cast

from lf.output.sinks import Sink
from lf.processing.processor import FileProcessor, ProcessedFile
from lf.selection.selector import display_path

log = logging.getLogger(__name__)


@dataclass
class RunTotals:
    lines: int = 0
    tokens: int = 0
    files: int = 0

    def add(self, result: ProcessedFile) -> None:
        self.lines += result.line_count
        self.tokens += result.token_count
        self.files += 1


def format_entry(path: str | PurePath, content: str) -> str:
    """One output entry: the display path, the content, then a blank line."""
    return f"{display_path(path)}\n{content}\n\n"


def default_workers() -> int:
    return os.cpu_count() or 1


class Aggregator:
    """
    Processes candidate files (paths relative to `root`) and writes their
    entries, in candidate order, to a sink created by `sink_factory`.

    The sink is only created when there is at least one candidate, and before
    any file is read.
    """

    def __init__(
        self,
        processor: FileProcessor,
        sink_factory: Callable[[], Sink],
        root: Path = Path("."),
        workers: int | None = None,
    ) -> None:
        self.processor = processor
        self.sink_factory = sink_factory
        self.root = root
        self.workers = workers if workers and workers > 0 else default_workers()

    def run(self, candidates: Sequence[Path]) -> RunTotals:
        totals = RunTotals()
        if not candidates:
            return totals

        sink = self.sink_factory()
        try:
            results = self._process_all(candidates)
            for result in results:
                totals.add(result)
                sink.write(format_entry(result.path, result.content))
        except BaseException:
            sink.abort()
            raise
        sink.close()
        return totals

    def _process_one(self, index: int, path: Path, results: list[ProcessedFile | None]) -> None:
        results[index] = self.processor.process(path, self.root / path)

    def _process_all(self, candidates: Sequence[Path]) -> list[ProcessedFile]:
        results: list[ProcessedFile | None] = [None] * len(candidates)
        workers = min(self.workers, len(candidates))
        log.debug("Processing %d files with %d workers", len(candidates), workers)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(self._process_one, i, path, results)
                for i, path in enumerate(candidates)
            ]
            done, _pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in futures:
                error = future.exception() if future in done else None
                if error is not None:
                    for f in futures:
                        f.cancel()
                    raise error

        # Every task finished without error, so every slot is filled.
        return cast(list[ProcessedFile], results)
