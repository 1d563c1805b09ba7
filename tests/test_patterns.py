"""Tests for pattern normalization and classification."""

from __future__ import annotations

import pytest

from lf.errors import InvalidPatternError
from lf.selection.patterns import (
    MatcherSet,
    build_matcher_sets,
    classify,
    glob_to_regex,
    is_hidden_glob,
    normalize_pattern,
)


@pytest.mark.parametrize("name", ["src", "docs", "node_modules", "my-lib_2"])
def test_bare_name_becomes_directory_glob(name: str):
    assert normalize_pattern(name) == f"{name}/**"


def test_dot_selects_everything():
    assert normalize_pattern(".") == "**/*"
    assert normalize_pattern("./") == "**/*"


def test_trailing_slash_selects_directory_contents():
    assert normalize_pattern("src/") == "src/**/*"
    assert normalize_pattern(".github/") == ".github/**/*"


def test_bare_dotted_name_is_directory():
    assert normalize_pattern(".github") == ".github/**"
    assert normalize_pattern(".env") == ".env/**"


def test_globs_and_paths_are_unchanged():
    assert normalize_pattern("*.py") == "*.py"
    assert normalize_pattern("main.rs") == "main.rs"
    assert normalize_pattern("src/lib") == "src/lib"
    assert normalize_pattern("**/*.md") == "**/*.md"


def test_is_hidden_glob():
    assert is_hidden_glob(".env")
    assert is_hidden_glob("dir/.git")
    assert is_hidden_glob("./.github/**")
    assert is_hidden_glob("**/.*")
    assert not is_hidden_glob("src")
    assert not is_hidden_glob(".")
    assert not is_hidden_glob("**/*")
    assert not is_hidden_glob("./src/**")


def test_classify_exclude_is_verbatim():
    pattern = classify("~build/")
    assert pattern.is_exclude
    assert pattern.normalized == "build/"
    assert not pattern.is_hidden_explicit


def test_classify_hidden():
    pattern = classify(".github")
    assert not pattern.is_exclude
    assert pattern.normalized == ".github/**"
    assert pattern.is_hidden_explicit


def test_build_matcher_sets_routes_patterns():
    sets = build_matcher_sets(["src", ".github", "~*.log", "*.py"])
    assert sets.visible_include.globs == ("src/**", "*.py")
    assert sets.hidden_include.globs == (".github/**",)
    assert sets.exclude.globs == ("*.log",)


def test_build_matcher_sets_adds_ignore_globs_to_exclude():
    sets = build_matcher_sets(["."], ["**/node_modules/**"])
    assert sets.exclude.globs == ("**/node_modules/**",)
    assert sets.exclude.matches("node_modules/pkg.json")


def test_empty_pattern_is_invalid():
    with pytest.raises(InvalidPatternError):
        build_matcher_sets([""])


def test_empty_exclude_is_invalid():
    with pytest.raises(InvalidPatternError) as exc:
        build_matcher_sets(["src", "~"])
    assert exc.value.pattern == ""


def test_empty_matcher_set_matches_nothing():
    empty = MatcherSet()
    assert len(empty) == 0
    assert not empty.matches("anything.txt")


def test_matcher_set_is_order_independent():
    globs = ["src/**", "*.md", "**/test_*.py"]
    forward = MatcherSet(globs)
    backward = MatcherSet(reversed(globs))
    paths = ["src/a.c", "README.md", "docs/x.md", "tests/test_a.py", "lib/a.py", "a.txt"]
    for path in paths:
        assert forward.matches(path) == backward.matches(path)


def test_comment_and_negation_prefixes_match_literally():
    assert MatcherSet(["#notes.txt"]).matches("#notes.txt")
    assert MatcherSet(["!important"]).matches("!important")


@pytest.mark.parametrize(
    "glob", ["src/[", "*.[ch", "src/{a,b", "src/a}", "src/[z-a].c", "src/\\"]
)
def test_malformed_glob_is_invalid(glob: str):
    with pytest.raises(InvalidPatternError) as exc:
        build_matcher_sets([glob])
    assert exc.value.pattern == glob


def test_unclosed_class_in_bare_name_is_invalid():
    with pytest.raises(InvalidPatternError):
        build_matcher_sets(["["])


def test_malformed_exclude_is_invalid():
    with pytest.raises(InvalidPatternError) as exc:
        build_matcher_sets(["src", "~*.{log"])
    assert exc.value.pattern == "*.{log"


def test_brace_alternation():
    matcher = MatcherSet(["*.{txt,md}"])
    assert matcher.matches("a.txt")
    assert matcher.matches("docs/b.md")
    assert not matcher.matches("c.rs")


def test_star_crosses_directories():
    assert MatcherSet(["src/*.txt"]).matches("src/a/b.txt")
    assert MatcherSet(["a?c"]).matches("a/c")


def test_glob_matches_whole_path_only():
    matcher = MatcherSet(["tests"])
    assert matcher.matches("tests")
    assert not matcher.matches("tests/a.py")
    assert not MatcherSet(["*.txt"]).matches("notes.txt/readme.md")


def test_recursive_wildcards():
    assert MatcherSet(["**"]).matches("a/b/c")
    assert MatcherSet(["**/*.py"]).matches("a.py")
    assert MatcherSet(["**/*.py"]).matches("pkg/mod/a.py")
    assert MatcherSet(["src/**"]).matches("src/a/b.txt")
    assert not MatcherSet(["src/**"]).matches("src")
    assert MatcherSet(["a/**/b"]).matches("a/b")
    assert MatcherSet(["a/**/b"]).matches("a/x/y/b")
    assert not MatcherSet(["a/**/b"]).matches("ab")


def test_character_classes():
    assert MatcherSet(["file[0-9].txt"]).matches("file7.txt")
    assert not MatcherSet(["file[0-9].txt"]).matches("fileA.txt")
    assert MatcherSet(["file[!0-9].txt"]).matches("fileA.txt")
    assert MatcherSet(["[]]x"]).matches("]x")
    assert MatcherSet(["[a-]"]).matches("-")


def test_escaped_metacharacters_are_literal():
    assert MatcherSet(["\\*.txt"]).matches("*.txt")
    assert not MatcherSet(["\\*.txt"]).matches("a.txt")


def test_glob_to_regex_anchors_both_ends():
    assert glob_to_regex("*.py") == r"(?s:.*\.py)\Z"
    assert glob_to_regex("**") == r"(?s:.*)\Z"
