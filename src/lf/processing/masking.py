"""Collapse runs of import lines into a single placeholder line."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class MaskRule:
    """
    Which files a mask applies to (by extension, case-insensitive), the
    keyword that marks a line as an import, and the line that replaces a run.
    """

    language: str
    extensions: tuple[str, ...]
    keyword: str
    placeholder: str

    def applies_to(self, path: Path) -> bool:
        return path.suffix[1:].lower() in self.extensions


MASK_RULES: dict[str, MaskRule] = {
    "java": MaskRule(
        language="java",
        extensions=("java",),
        keyword="import ",
        placeholder="import ...",
    ),
}


def mask_rules_for(languages: list[str]) -> list[MaskRule]:
    """Look up rules by language name. Raises `ValueError` for unknown languages."""
    try:
        return [MASK_RULES[lang.lower()] for lang in languages]
    except KeyError as e:
        raise ValueError(f"No import mask for language: {e.args[0]}") from e


def mask_imports(content: str, rule: MaskRule) -> str:
    """
    Replace each contiguous run of import lines with `rule.placeholder`.
    Content without any import lines is returned unchanged.
    """
    out: list[str] = []
    in_run = False
    masked = False
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    for line in lines:
        if line.lstrip().startswith(rule.keyword):
            if not in_run:
                out.append(rule.placeholder)
                in_run = True
                masked = True
        else:
            out.append(line)
            in_run = False
    if not masked:
        return content
    return "".join(f"{line}\n" for line in out)
