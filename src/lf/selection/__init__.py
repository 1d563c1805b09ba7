"""
Path selection: pattern classification, ignore-file translation, the path
selector, and the directory walker.
"""

from lf.selection.ignore_files import collect_ignore_globs, translate_ignore_line
from lf.selection.patterns import (
    MatcherSet,
    MatcherSets,
    Pattern,
    build_matcher_sets,
    classify,
    is_hidden_glob,
    normalize_pattern,
)
from lf.selection.selector import display_path, is_selected
from lf.selection.walker import FileTreeWalker, WalkEntry, Walker, collect_candidates

__all__ = [
    "FileTreeWalker",
    "MatcherSet",
    "MatcherSets",
    "Pattern",
    "WalkEntry",
    "Walker",
    "build_matcher_sets",
    "classify",
    "collect_candidates",
    "collect_ignore_globs",
    "display_path",
    "is_hidden_glob",
    "is_selected",
    "normalize_pattern",
    "translate_ignore_line",
]
