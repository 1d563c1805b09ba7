"""Per-path selection against the three matcher sets."""

from __future__ import annotations

from pathlib import PurePath

from lf.selection.patterns import MatcherSet, MatcherSets


def _posix(path: str | PurePath) -> str:
    return str(path).replace("\\", "/")


def display_path(path: str | PurePath) -> str:
    """Path as shown in output: `/` separators, no leading `./`."""
    p = _posix(path)
    return p[2:] if p.startswith("./") else p


def is_hidden_path(path: str | PurePath) -> bool:
    """True if any segment other than `.` or `..` starts with a dot."""
    return any(
        seg.startswith(".") and seg not in (".", "..") for seg in _posix(path).split("/")
    )


def is_selected(
    path: str | PurePath,
    visible_include: MatcherSet,
    hidden_include: MatcherSet,
    exclude: MatcherSet,
) -> bool:
    """
    A path is selected if the active include set matches its full form, its
    form without a leading `./`, or its bare filename, and the exclude set
    matches none of them. Hidden paths use the hidden include set.

    Testing the bare filename lets a pattern like `*.py` match at any depth.
    """
    full = _posix(path)
    stripped = full[2:] if full.startswith("./") else full
    filename = stripped.rsplit("/", 1)[-1]
    forms = (full, stripped, filename)

    include = hidden_include if is_hidden_path(full) else visible_include
    if not any(include.matches(f) for f in forms):
        return False
    return not any(exclude.matches(f) for f in forms)


def is_selected_by(path: str | PurePath, sets: MatcherSets) -> bool:
    return is_selected(path, sets.visible_include, sets.hidden_include, sets.exclude)
