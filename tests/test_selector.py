"""Tests for per-path selection."""

from __future__ import annotations

from pathlib import Path

from lf.selection.patterns import build_matcher_sets
from lf.selection.selector import display_path, is_hidden_path, is_selected_by


def _selected(patterns: list[str], path: str | Path) -> bool:
    return is_selected_by(path, build_matcher_sets(patterns))


def test_is_hidden_path():
    assert is_hidden_path(".env")
    assert is_hidden_path("src/.cache/x")
    assert is_hidden_path("./.github/ci.yml")
    assert not is_hidden_path("./src/a.txt")
    assert not is_hidden_path("../src/a.txt")
    assert not is_hidden_path("src/a.txt")


def test_display_path():
    assert display_path("./src/a.txt") == "src/a.txt"
    assert display_path("src\\lib\\a.txt") == "src/lib/a.txt"
    assert display_path(Path("src") / "a.txt") == "src/a.txt"


def test_directory_pattern():
    assert _selected(["src"], "src/main.txt")
    assert _selected(["src"], "./src/deep/main.txt")
    assert not _selected(["src"], "docs/main.txt")


def test_bare_glob_matches_at_any_depth():
    assert _selected(["*.py"], "a.py")
    assert _selected(["*.py"], "pkg/mod/a.py")
    assert not _selected(["*.py"], "pkg/a.pyc")


def test_pattern_with_slash_is_anchored():
    assert _selected(["src/*.txt"], "src/a.txt")
    assert not _selected(["src/*.txt"], "other/src/a.txt")


def test_hidden_paths_need_hidden_pattern():
    assert not _selected(["**/*"], ".env")
    assert not _selected(["**/*"], ".github/workflows/ci.yml")
    assert _selected(["**/*", ".github"], ".github/workflows/ci.yml")
    assert _selected(["**/.*"], ".env")


def test_hidden_pattern_does_not_select_visible_paths():
    assert not _selected([".github"], "src/main.txt")


def test_exclude_wins():
    assert _selected(["src", "~*.log"], "src/a.txt")
    assert not _selected(["src", "~*.log"], "src/a.log")
    assert not _selected(["src", "~src/gen/**"], "src/gen/x.txt")


def test_exclude_matches_bare_filename():
    assert not _selected(["**/*", "~Makefile"], "build/Makefile")


def test_exclude_matches_exact_path_only():
    assert _selected(["**/*", "~tests"], "tests/a.py")
    assert not _selected(["**/*", "~tests/**"], "tests/a.py")


def test_brace_alternation_selects_each_extension():
    assert _selected(["*.{txt,md}"], "src/a.txt")
    assert _selected(["*.{txt,md}"], "README.md")
    assert not _selected(["*.{txt,md}"], "main.rs")


def test_star_crosses_directories_in_anchored_pattern():
    assert _selected(["src/*.txt"], "src/a/b.txt")


def test_extension_glob_ignores_directory_names():
    assert not _selected(["*.txt"], "notes.txt/readme.md")
