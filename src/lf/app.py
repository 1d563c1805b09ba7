"""
Run orchestration: patterns in, one aggregated output plus totals out.

Collaborators that touch the outside world (walker, reader, tokenizer,
clipboard, stdout) are passed in via `Deps`, so tests can substitute fakes.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from lf.output.aggregator import Aggregator, RunTotals
from lf.output.clipboard import Clipboard
from lf.output.sinks import select_sink
from lf.processing.masking import mask_rules_for
from lf.processing.processor import FileProcessor
from lf.processing.reader import Reader, TextReader
from lf.processing.tokenizer import NullTokenCounter, Tokenizer
from lf.selection.ignore_files import collect_ignore_globs
from lf.selection.patterns import build_matcher_sets
from lf.selection.walker import FileTreeWalker, Walker, collect_candidates

log = logging.getLogger(__name__)


@dataclass
class Deps:
    walker: Walker = field(default_factory=FileTreeWalker)
    reader: Reader = field(default_factory=TextReader)
    tokenizer: Tokenizer = field(default_factory=NullTokenCounter)
    clipboard: Clipboard | None = None
    stdout: TextIO | None = None


@dataclass
class RunOptions:
    """
    `patterns` are user patterns (`~` prefix for exclusions). `home` is where
    global ignore files are looked up (defaults to the user's home directory).
    `workers=None` uses one worker per CPU.
    """

    patterns: Sequence[str]
    root: Path = Path(".")
    output: Path | None = None
    no_clipboard: bool = False
    mask_languages: list[str] = field(default_factory=list)
    respect_gitignore: bool = True
    home: Path | None = None
    workers: int | None = None


def run_app(deps: Deps, options: RunOptions) -> RunTotals:
    """
    Select files, process them concurrently, and write them in listing order
    to one sink. Returns zero totals without touching any sink when nothing
    matches.
    """
    ignore_globs: list[str] = []
    if options.respect_gitignore:
        ignore_globs = collect_ignore_globs(options.root, options.home)
    sets = build_matcher_sets(options.patterns, ignore_globs)
    mask_rules = mask_rules_for(options.mask_languages)
    log.debug(
        "Matchers: %d visible, %d hidden, %d exclude",
        len(sets.visible_include),
        len(sets.hidden_include),
        len(sets.exclude),
    )

    candidates = collect_candidates(deps.walker, options.root, sets, options.respect_gitignore)
    stdout = deps.stdout if deps.stdout is not None else sys.stdout

    processor = FileProcessor(deps.reader, deps.tokenizer, mask_rules)
    aggregator = Aggregator(
        processor,
        sink_factory=lambda: select_sink(
            options.output, options.no_clipboard, deps.clipboard, stdout
        ),
        root=options.root,
        workers=options.workers,
    )
    return aggregator.run(candidates)
