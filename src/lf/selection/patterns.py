"""
Pattern classification: turns user shorthand into compiled matcher sets.

Each user pattern lands in exactly one of three sets:

- `~pattern` goes verbatim into the exclude set,
- patterns that explicitly target a dotfile or dot-directory go into the
  hidden include set,
- everything else goes into the visible include set.

Globs use the usual shell-style dialect: `*` and `?` also match `/`, `**` spans
directories, `{a,b}` is an alternation and `[...]` a character class. Each glob
is translated to a regular expression and compiled as a `pathspec` regex
pattern. A glob only matches the whole path; there is no implied "and
everything below".
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import PurePath

import pathspec

from lf.errors import InvalidPatternError

EXCLUDE_PREFIX = "~"


def normalize_pattern(pattern: str) -> str:
    """
    Expand user shorthand into a glob. First matching rule wins:

    - `.` or `./` selects everything (`**/*`)
    - a trailing `/` selects everything under that directory
    - a bare dotted name with no `*` or `/` (like `.github`) is a directory
    - a bare name with no `*`, `/` or `.` (like `src`) is a directory
    - anything else is already a glob
    """
    if pattern in (".", "./"):
        return "**/*"
    if pattern.endswith("/"):
        return f"{pattern}**/*"
    if pattern.startswith(".") and not any(c in pattern for c in "*/"):
        return f"{pattern}/**"
    if not any(c in pattern for c in "*/."):
        return f"{pattern}/**"
    return pattern


def is_hidden_glob(glob: str) -> bool:
    """True if the glob's literal form targets a dotfile or dot-directory."""
    g = glob[2:] if glob.startswith("./") else glob
    return (g.startswith(".") and len(g) > 1) or "/." in g


@dataclass(frozen=True)
class Pattern:
    """A classified user pattern."""

    raw: str
    is_exclude: bool
    normalized: str
    is_hidden_explicit: bool


def classify(raw: str) -> Pattern:
    if raw.startswith(EXCLUDE_PREFIX):
        glob = raw[len(EXCLUDE_PREFIX) :]
        return Pattern(raw=raw, is_exclude=True, normalized=glob, is_hidden_explicit=False)
    normalized = normalize_pattern(raw)
    return Pattern(
        raw=raw,
        is_exclude=False,
        normalized=normalized,
        is_hidden_explicit=is_hidden_glob(normalized),
    )


# Tokens produced by `_parse_glob`. `**` becomes one of the three recursive
# tokens depending on where it sits; anywhere else it is a plain `*`.
_Token = tuple
_STAR: _Token = ("star",)
_ANY: _Token = ("any",)
_RECURSIVE_PREFIX: _Token = ("prefix",)
_RECURSIVE_SUFFIX: _Token = ("suffix",)
_RECURSIVE_DIRS: _Token = ("dirs",)
_SLASH: _Token = ("lit", "/")


def _parse_star(glob: str, pos: int, tokens: list[_Token], nested: bool) -> int:
    """Handle `*` or `**` (the first `*` is already consumed at `pos - 1`)."""
    if pos >= len(glob) or glob[pos] != "*":
        tokens.append(_STAR)
        return pos
    pos += 1
    nxt = glob[pos] if pos < len(glob) else None

    if not tokens:
        if nxt is None or nxt == "/":
            tokens.append(_RECURSIVE_PREFIX)
            return pos + 1 if nxt == "/" else pos
        tokens.append(_STAR)
        return pos

    prev = tokens[-1]
    if prev not in (_SLASH, _RECURSIVE_PREFIX, _RECURSIVE_DIRS):
        tokens.append(_STAR)
        return pos
    if nxt is None or (nested and nxt in ",}"):
        kind = _RECURSIVE_SUFFIX
    elif nxt == "/":
        kind = _RECURSIVE_DIRS
        pos += 1
    else:
        tokens.append(_STAR)
        return pos

    tokens.pop()
    tokens.append(prev if prev == _RECURSIVE_PREFIX else kind)
    return pos


def _parse_class(glob: str, pos: int) -> tuple[_Token, int]:
    """Parse a `[...]` class starting just after the `[`."""
    negated = pos < len(glob) and glob[pos] in "!^"
    if negated:
        pos += 1
    ranges: list[tuple[str, str]] = []
    first = True
    in_range = False
    while True:
        if pos >= len(glob):
            raise ValueError("unclosed character class; missing ']'")
        c = glob[pos]
        pos += 1
        if c == "]" and not first:
            break
        if c == "-" and not first and not in_range:
            in_range = True
        elif in_range:
            start = ranges[-1][0]
            if start > c:
                raise ValueError(f"invalid range {start}-{c}")
            ranges[-1] = (start, c)
            in_range = False
        else:
            ranges.append((c, c))
        first = False
    if in_range:
        ranges.append(("-", "-"))

    body = "".join(
        re.escape(lo) if lo == hi else f"{re.escape(lo)}-{re.escape(hi)}" for lo, hi in ranges
    )
    return ("class", f"[{'^' if negated else ''}{body}]"), pos


def _parse_glob(glob: str, pos: int = 0, nested: bool = False) -> tuple[list[_Token], int]:
    """
    Tokenize a glob. Inside `{...}` (`nested`), stops at the `,` or `}` that
    ends the current alternative. Raises `ValueError` for malformed globs.
    """
    tokens: list[_Token] = []
    while pos < len(glob):
        c = glob[pos]
        if nested and c in ",}":
            return tokens, pos
        pos += 1
        if c == "\\":
            if pos >= len(glob):
                raise ValueError("dangling '\\'")
            tokens.append(("lit", glob[pos]))
            pos += 1
        elif c == "?":
            tokens.append(_ANY)
        elif c == "*":
            pos = _parse_star(glob, pos, tokens, nested)
        elif c == "[":
            token, pos = _parse_class(glob, pos)
            tokens.append(token)
        elif c == "{":
            branches: list[list[_Token]] = []
            while True:
                branch, pos = _parse_glob(glob, pos, nested=True)
                branches.append(branch)
                if pos >= len(glob):
                    raise ValueError("unclosed alternate group; missing '}'")
                pos += 1
                if glob[pos - 1] == "}":
                    break
            tokens.append(("alt", branches))
        elif c == "}":
            raise ValueError("unopened alternate group; missing '{'")
        else:
            tokens.append(("lit", c))
    return tokens, pos


def _render(tokens: list[_Token]) -> str:
    parts: list[str] = []
    for token in tokens:
        kind = token[0]
        if kind == "lit":
            parts.append(re.escape(token[1]))
        elif kind == "any":
            parts.append(".")
        elif kind == "star":
            parts.append(".*")
        elif kind == "prefix":
            parts.append("(?:/?|.*/)")
        elif kind == "suffix":
            parts.append("/.*")
        elif kind == "dirs":
            parts.append("(?:/|/.*/)")
        elif kind == "class":
            parts.append(token[1])
        else:
            parts.append("(?:" + "|".join(_render(branch) for branch in token[1]) + ")")
    return "".join(parts)


def glob_to_regex(glob: str) -> str:
    """
    Translate a glob to a regular expression that matches whole paths.

    `*` and `?` match any characters including `/`. `**/` at the start matches
    zero or more leading directories, `/**` at the end matches everything
    below, and `/**/` matches zero or more directories in between. A lone `**`
    matches everything.
    """
    tokens, _pos = _parse_glob(glob)
    if tokens == [_RECURSIVE_PREFIX]:
        return r"(?s:.*)\Z"
    return rf"(?s:{_render(tokens)})\Z"


def _compile(glob: str) -> pathspec.RegexPattern:
    if not glob.strip():
        raise InvalidPatternError(glob, "empty pattern")
    try:
        return pathspec.RegexPattern(glob_to_regex(glob))
    except (ValueError, re.error) as e:
        raise InvalidPatternError(glob, f"invalid glob pattern ({e})") from e


class MatcherSet:
    """
    An order-independent union of globs. Matches a path if any glob matches it.
    An empty set matches nothing.

    Paths are matched exactly as given (no `./` or `/` stripping), so callers
    decide which forms of a path to test.
    """

    def __init__(self, globs: Iterable[str] = ()) -> None:
        self._globs: tuple[str, ...] = tuple(globs)
        self._patterns = [_compile(glob) for glob in self._globs]

    @property
    def globs(self) -> tuple[str, ...]:
        return self._globs

    def matches(self, path: str | PurePath) -> bool:
        text = str(path)
        return any(pattern.match_file(text) is not None for pattern in self._patterns)

    def __len__(self) -> int:
        return len(self._globs)

    def __repr__(self) -> str:
        return f"MatcherSet({list(self._globs)!r})"


@dataclass(frozen=True)
class MatcherSets:
    """The three matcher sets used for one run."""

    visible_include: MatcherSet
    hidden_include: MatcherSet
    exclude: MatcherSet


def build_matcher_sets(
    patterns: Iterable[str], ignore_globs: Iterable[str] = ()
) -> MatcherSets:
    """
    Classify user patterns and compile the three matcher sets. `ignore_globs`
    (already translated from ignore files) are added to the exclude set.

    Raises `InvalidPatternError` naming the first glob that does not compile.
    """
    visible: list[str] = []
    hidden: list[str] = []
    exclude: list[str] = []
    for raw in patterns:
        if not raw:
            raise InvalidPatternError(raw, "empty pattern")
        pattern = classify(raw)
        if pattern.is_exclude:
            exclude.append(pattern.normalized)
        elif pattern.is_hidden_explicit:
            hidden.append(pattern.normalized)
        else:
            visible.append(pattern.normalized)
    exclude.extend(ignore_globs)

    return MatcherSets(
        visible_include=MatcherSet(visible),
        hidden_include=MatcherSet(hidden),
        exclude=MatcherSet(exclude),
    )
