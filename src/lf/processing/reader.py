"""Line-oriented text reading."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from lf.errors import ReadError


class Reader(Protocol):
    def read_lines(self, path: Path) -> tuple[str, int]: ...


class TextReader:
    """
    Reads a UTF-8 file line by line and re-joins the lines with `\\n`, so the
    result always ends with exactly one newline per line (`\\r\\n` endings are
    normalized too). Returns the content and the number of lines.
    """

    def read_lines(self, path: Path) -> tuple[str, int]:
        parts: list[str] = []
        try:
            with path.open("r", encoding="utf-8", newline="\n") as f:
                for line in f:
                    if line.endswith("\n"):
                        line = line[:-1]
                        if line.endswith("\r"):
                            line = line[:-1]
                    parts.append(line)
                    parts.append("\n")
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(path, e) from e
        return "".join(parts), len(parts) // 2
