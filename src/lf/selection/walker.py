"""
Directory walking with per-directory `.gitignore` pruning.

The walker only enumerates. Deciding which files are selected is the
selector's job; see `collect_candidates`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import pathspec

from lf.selection.patterns import MatcherSets
from lf.selection.selector import is_selected_by

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkEntry:
    """A filesystem entry, with `path` relative to the walk root."""

    path: Path
    is_file: bool


class Walker(Protocol):
    def walk(self, root: Path, honor_ignore: bool) -> Iterable[WalkEntry]: ...


def load_gitignore(directory: Path) -> pathspec.PathSpec | None:
    """
    Read `.gitignore` in the given directory and return a compiled `PathSpec`,
    or `None` if the file doesn't exist, is empty, or can't be read.
    """
    gitignore = directory / ".gitignore"
    if not gitignore.is_file():
        return None
    try:
        lines = gitignore.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        log.debug("Skipping unreadable %s: %s", gitignore, e)
        return None
    lines = [line for line in lines if line.strip() and not line.strip().startswith("#")]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)


class FileTreeWalker:
    """
    Walks a tree with `os.walk()`, without following symlinks. Entries are
    sorted by name at every level so an unchanged tree always enumerates in
    the same order. Hidden entries are included.

    With `honor_ignore`, anything matched by the `.gitignore` files from the
    root down to the current directory is pruned.
    """

    def __init__(self) -> None:
        # Cache gitignore specs per directory to avoid re-reading from disk.
        self._gitignore_cache: dict[Path, pathspec.PathSpec | None] = {}

    def walk(self, root: Path, honor_ignore: bool) -> Iterator[WalkEntry]:
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            rel_dir = current.relative_to(root)

            specs: list[tuple[Path, pathspec.PathSpec]] = []
            if honor_ignore:
                specs = self._get_gitignore_chain(rel_dir, root)

            # Prune in place (prevents descent), and fix the walk order.
            dirnames[:] = sorted(
                d for d in dirnames if not self._is_ignored(rel_dir / d, True, specs)
            )
            for d in dirnames:
                yield WalkEntry(rel_dir / d, is_file=False)

            for filename in sorted(filenames):
                rel = rel_dir / filename
                if self._is_ignored(rel, False, specs):
                    continue
                full = current / filename
                yield WalkEntry(rel, is_file=full.is_file() and not full.is_symlink())

    @staticmethod
    def _is_ignored(
        rel: Path, is_dir: bool, specs: list[tuple[Path, pathspec.PathSpec]]
    ) -> bool:
        for base, spec in specs:
            # Gitignore patterns are relative to the directory holding the file.
            sub = rel.relative_to(base).as_posix()
            if is_dir:
                sub += "/"
            if spec.match_file(sub):
                return True
        return False

    def _get_gitignore(self, directory: Path) -> pathspec.PathSpec | None:
        """Load and cache gitignore for a directory."""
        if directory not in self._gitignore_cache:
            self._gitignore_cache[directory] = load_gitignore(directory)
        return self._gitignore_cache[directory]

    def _get_gitignore_chain(
        self, rel_dir: Path, root: Path
    ) -> list[tuple[Path, pathspec.PathSpec]]:
        """Collect gitignore specs from the root down to `rel_dir` (inclusive)."""
        specs: list[tuple[Path, pathspec.PathSpec]] = []
        base = Path(".")
        chain = [base] + [base.joinpath(*rel_dir.parts[: i + 1]) for i in range(len(rel_dir.parts))]
        for rel in chain:
            spec = self._get_gitignore(root / rel)
            if spec is not None:
                specs.append((rel, spec))
        return specs


def collect_candidates(
    walker: Walker, root: Path, sets: MatcherSets, honor_ignore: bool
) -> list[Path]:
    """
    Regular files from the walk that pass selection, in walk order. Each path
    is tested as walked from the current directory, `./`-prefixed, so globs
    written as `./src/*.txt` match too.
    """
    candidates: list[Path] = []
    for entry in walker.walk(root, honor_ignore):
        if entry.is_file and is_selected_by(f"./{entry.path.as_posix()}", sets):
            candidates.append(entry.path)
    log.debug("%d candidate files under %s", len(candidates), root)
    return candidates
