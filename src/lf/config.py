"""
Config file support for lf.

The nearest `.lf.toml`, `lf.toml`, or `pyproject.toml` with a `[tool.lf]` table,
looking upward from the run root, supplies defaults. A flag given on the command
line always wins over the config file.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

from lf.errors import ConfigError
from lf.processing.masking import MASK_RULES

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class LfConfig:
    """Settings read from a config file. `None` means the key was absent."""

    output: str | None = None
    no_clipboard: bool | None = None
    count_tokens: bool | None = None
    mask_imports: list[str] | None = None
    jobs: int | None = None
    respect_gitignore: bool | None = None
    exclude: list[str] | None = None


_CONFIG_FILENAMES = (".lf.toml", "lf.toml", "pyproject.toml")

# Expected TOML value kind per field: "str", "bool", "int" or "list" (of strings).
_FIELD_KINDS: dict[str, str] = {
    "output": "str",
    "no_clipboard": "bool",
    "count_tokens": "bool",
    "mask_imports": "list",
    "jobs": "int",
    "respect_gitignore": "bool",
    "exclude": "list",
}


def _read_toml(path: Path) -> dict[str, Any]:
    return tomllib.loads(path.read_text(encoding="utf-8"))


def _has_lf_table(pyproject: Path) -> bool:
    try:
        return "lf" in _read_toml(pyproject).get("tool", {})
    except (tomllib.TOMLDecodeError, OSError, UnicodeDecodeError):
        return False


def find_config_file(start_dir: Path) -> Path | None:
    """
    Return the first config file found in `start_dir` or its ancestors. Within
    one directory `.lf.toml` beats `lf.toml`, which beats `pyproject.toml`; a
    `pyproject.toml` only counts if it has a `[tool.lf]` table.
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for filename in _CONFIG_FILENAMES:
            candidate = directory / filename
            if not candidate.is_file():
                continue
            if filename != "pyproject.toml" or _has_lf_table(candidate):
                return candidate
    return None


def _check_kind(key: str, value: Any, kind: str, config_path: Path) -> None:
    if kind == "bool":
        ok = isinstance(value, bool)
        expected = "true or false"
    elif kind == "int":
        ok = isinstance(value, int) and not isinstance(value, bool)
        expected = "an integer"
    elif kind == "str":
        ok = isinstance(value, str)
        expected = "a string"
    else:
        ok = isinstance(value, list) and all(
            isinstance(item, str) for item in cast(list[Any], value)
        )
        expected = "a list of strings"
    if not ok:
        raise ConfigError(config_path, f"{key} must be {expected}, got {value!r}")


def _parse_config_data(data: dict[str, Any], config_path: Path) -> LfConfig:
    """
    Build an `LfConfig` from TOML data. Tables (like `[output]`) are only for
    grouping and are flattened; keys may be kebab-case. Unknown keys are ignored.
    """
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            flat.update(cast(dict[str, Any], value))
        else:
            flat[key] = value

    values: dict[str, Any] = {}
    for key, value in flat.items():
        name = key.replace("-", "_")
        kind = _FIELD_KINDS.get(name)
        if kind is None:
            continue
        _check_kind(key, value, kind, config_path)
        values[name] = value
    return LfConfig(**values)


def _validate(config: LfConfig, config_path: Path) -> None:
    for lang in config.mask_imports or []:
        if lang.lower() not in MASK_RULES:
            raise ConfigError(config_path, f"unknown mask-imports language {lang!r}")
    if config.jobs is not None and config.jobs < 1:
        raise ConfigError(config_path, "jobs must be at least 1")


def load_config(config_path: Path) -> LfConfig:
    """
    Read and check a config file. For `pyproject.toml` only `[tool.lf]` is
    used. Raises `ConfigError` if the file can't be read or parsed, or if a
    value has the wrong type or is out of range.
    """
    try:
        data = _read_toml(config_path)
    except (tomllib.TOMLDecodeError, OSError, UnicodeDecodeError) as e:
        raise ConfigError(config_path, e) from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("lf", {})

    config = _parse_config_data(data, config_path)
    _validate(config, config_path)
    return config


_T = TypeVar("_T")


def merge_cli_with_config(cli_opts: _T, config: LfConfig | None, explicit_flags: set[str]) -> _T:
    """
    Copy configured values onto `cli_opts`, skipping fields named in
    `explicit_flags` (set on the command line).
    """
    if config is None:
        return cli_opts
    for cfg_field in fields(LfConfig):
        value = getattr(config, cfg_field.name)
        if value is not None and cfg_field.name not in explicit_flags:
            if hasattr(cli_opts, cfg_field.name):
                setattr(cli_opts, cfg_field.name, value)
    return cli_opts
