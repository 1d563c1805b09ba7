#!/usr/bin/env python3
"""
lf: List files with line and token counts

Selects files under the current directory by glob patterns and copies their
contents, each preceded by its path, to the clipboard (or to a file, or stdout).
Hidden paths are skipped unless a pattern explicitly names a dotted path.

Common usage:
  lf src
  lf '*.py' '~tests/**'
  lf . --no-clipboard
  lf .github -o context.txt

Patterns prefixed with `~` are exclusions. Defaults can be set in `.lf.toml`,
`lf.toml` or `[tool.lf]` in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

from lf.app import Deps, RunOptions, run_app
from lf.config import find_config_file, load_config, merge_cli_with_config
from lf.errors import LfError
from lf.output.clipboard import SystemClipboard
from lf.processing.masking import MASK_RULES
from lf.processing.tokenizer import make_tokenizer
from lf.selection.patterns import EXCLUDE_PREFIX

log = logging.getLogger(__name__)

# Options fields that the config file can also set.
_CONFIGURABLE_FLAGS = (
    "output",
    "no_clipboard",
    "mask_imports",
    "respect_gitignore",
    "count_tokens",
    "jobs",
)


@dataclass
class Options:
    """Command-line options for the lf tool."""

    patterns: list[str]
    output: str | None = None
    no_clipboard: bool = False
    mask_imports: list[str] = field(default_factory=list)
    respect_gitignore: bool = True
    count_tokens: bool = True
    jobs: int | None = None
    exclude: list[str] = field(default_factory=list)
    verbose: bool = False
    version: bool = False


def _build_parser() -> argparse.ArgumentParser:
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="lf",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        default=[],
        metavar="PATTERN",
        help="Glob patterns to select files (prefix with '~' to exclude)",
    )
    # Flags that a config file may also set default to None, so we can tell
    # whether the user passed them explicitly.
    parser.add_argument(
        "-o", "--output", type=str, default=None, help="Write output to this file"
    )
    parser.add_argument(
        "-n",
        "--no-clipboard",
        action="store_true",
        default=None,
        dest="no_clipboard",
        help="Print to stdout instead of copying to the clipboard",
    )
    for lang in sorted(MASK_RULES):
        parser.add_argument(
            f"--mask-{lang}-imports",
            action="append_const",
            const=lang,
            dest="mask_imports",
            default=None,
            help=f"Collapse runs of {lang} import lines into a single placeholder line",
        )
    parser.add_argument(
        "--no-gitignore",
        action="store_false",
        default=None,
        dest="respect_gitignore",
        help="Do not exclude files listed in .gitignore and global ignore files",
    )
    parser.add_argument(
        "--no-tokens",
        action="store_false",
        default=None,
        dest="count_tokens",
        help="Skip token counting",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        metavar="N",
        help="Number of files to process in parallel (default: number of CPUs)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug details to stderr"
    )
    parser.add_argument(
        "--version", action="store_true", help="Show version information and exit"
    )
    return parser


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns `(options, explicit_flags)`, where `explicit_flags` names the
    `Options` fields the user set on the command line (for config merge).
    """
    opts = _build_parser().parse_args(args)

    options = Options(patterns=opts.patterns, verbose=opts.verbose, version=opts.version)
    explicit_flags: set[str] = set()
    for name in _CONFIGURABLE_FLAGS:
        value = getattr(opts, name)
        if value is not None:
            setattr(options, name, value)
            explicit_flags.add(name)
    return options, explicit_flags


def _configure_logging(verbose: bool) -> logging.Logger:
    """Send `lf` log records to stderr; stdout is reserved for output."""
    logger = logging.getLogger("lf")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the lf CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)
    _configure_logging(options.verbose)

    if options.version:
        try:
            version = importlib.metadata.version("lf")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if not options.patterns:
        print("Error: At least one pattern must be provided", file=sys.stderr)
        return 1

    try:
        config_path = find_config_file(Path.cwd())
        if config_path:
            log.debug("Using config file %s", config_path)
            merge_cli_with_config(options, load_config(config_path), explicit_flags)

        patterns = list(options.patterns)
        patterns += [f"{EXCLUDE_PREFIX}{glob}" for glob in options.exclude]

        deps = Deps(
            tokenizer=make_tokenizer(options.count_tokens),
            clipboard=SystemClipboard(),
        )
        totals = run_app(
            deps,
            RunOptions(
                patterns=patterns,
                root=Path("."),
                output=Path(options.output) if options.output else None,
                no_clipboard=options.no_clipboard,
                mask_languages=options.mask_imports,
                respect_gitignore=options.respect_gitignore,
                workers=options.jobs,
            ),
        )
    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        return 130
    except LfError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        # Catch other unexpected errors (tokenizer setup, etc.).
        log.debug("Unexpected error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if totals.files == 0:
        print("No files found matching the patterns.")
        return 0
    print(f"Lines: {totals.lines}")
    if options.count_tokens:
        print(f"Tokens ({deps.tokenizer.name}): {totals.tokens}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
