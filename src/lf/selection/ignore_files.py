"""
Translate ignore-file lines into exclude globs.

This is a simple reading of gitignore syntax: negation (`!`) lines
are skipped, and a root-anchored line (`/build`) excludes both the root-relative
path and the same name at any depth.
"""

from __future__ import annotations

import logging
from pathlib import Path

log = logging.getLogger(__name__)


def translate_ignore_line(line: str) -> list[str]:
    """
    Return the exclude globs derived from one ignore-file line (possibly none).
    """
    pat = line.strip()
    if not pat or pat.startswith("#"):
        return []
    if pat.startswith("!"):
        # Negations are unsupported: nothing is ever un-ignored.
        return []

    if pat.startswith("/"):
        rest = pat[1:]
        if not rest:
            return []
        if rest.endswith("/"):
            return [f"{rest}**/*", f"**/{rest}**/*"]
        return [f"{rest}/**", f"**/{rest}/**"]

    if pat.endswith("/"):
        pat = pat[:-1]
    if not pat:
        return []
    if "*" in pat:
        return [pat]
    if "/" in pat or "." in pat:
        return [f"**/{pat}"]
    return [f"**/{pat}/**"]


def translate_ignore_file(path: Path) -> list[str]:
    """
    Translate every line of an ignore file. A missing or unreadable file
    contributes nothing.
    """
    if not path.is_file():
        return []
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.debug("Skipping unreadable ignore file %s: %s", path, e)
        return []

    globs: list[str] = []
    for line in text.splitlines():
        globs.extend(translate_ignore_line(line))
    log.debug("Read %d exclude globs from %s", len(globs), path)
    return globs


def _home_dir() -> Path | None:
    try:
        return Path.home()
    except RuntimeError:
        return None


def ignore_sources(root: Path, home: Path | None = None) -> list[Path]:
    """
    Ignore files consulted for a run: the repo's `.gitignore` and
    `.git/info/exclude`, then the user's global ignore files.
    """
    sources = [root / ".gitignore", root / ".git" / "info" / "exclude"]
    home = home if home is not None else _home_dir()
    if home is not None:
        sources.append(home / ".gitignore_global")
        sources.append(home / ".config" / "git" / "ignore")
    return sources


def collect_ignore_globs(root: Path, home: Path | None = None) -> list[str]:
    """Union of exclude globs from all ignore sources. Order is irrelevant."""
    globs: list[str] = []
    for source in ignore_sources(root, home):
        globs.extend(translate_ignore_file(source))
    return globs
