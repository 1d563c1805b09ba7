"""Turns one selected file into its output content plus line and token counts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from lf.processing.binary import binary_placeholder, is_binary_file
from lf.processing.masking import MaskRule, mask_imports
from lf.processing.reader import Reader
from lf.processing.tokenizer import Tokenizer


@dataclass(frozen=True)
class ProcessedFile:
    path: Path
    content: str
    line_count: int
    token_count: int


class FileProcessor:
    """
    Binary files (by extension) become a one-line placeholder with zero lines.
    Text files are read line by line, then masked if a rule applies.
    Tokens are counted on the final content.

    Safe to call from several threads at once: it holds no mutable state.
    """

    def __init__(
        self, reader: Reader, tokenizer: Tokenizer, mask_rules: Sequence[MaskRule] = ()
    ) -> None:
        self.reader = reader
        self.tokenizer = tokenizer
        self.mask_rules = tuple(mask_rules)

    def process(self, path: Path, source: Path | None = None) -> ProcessedFile:
        """
        Process the file at `source` (defaults to `path`), reporting it as `path`.
        """
        source = source if source is not None else path

        if is_binary_file(source):
            content = binary_placeholder(source)
            return ProcessedFile(path, content, 0, self.tokenizer.count_tokens(content))

        content, lines = self.reader.read_lines(source)
        for rule in self.mask_rules:
            if rule.applies_to(source):
                content = mask_imports(content, rule)
        return ProcessedFile(path, content, lines, self.tokenizer.count_tokens(content))
