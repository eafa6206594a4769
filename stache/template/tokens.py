"""
Directive tokens.

A directive is one recognised ``{{...}}`` occurrence inside a text run.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple


FORMATTER_SEPARATOR = " | "


class DirectiveKind(enum.Enum):
    """Closed set of directive kinds produced by the tokenizer."""
    INTERPOLATOR = "interpolator"
    TRIPLE = "triple"
    SECTION = "section"
    PARTIAL = "partial"


@dataclass(frozen=True)
class Directive:
    """
    One mustache directive with its position in the scanned string.

    ``source_start``/``source_end`` form a half-open range that covers the
    delimiters as well as the body.
    """
    kind: DirectiveKind
    keypath: str
    formatters: Tuple[str, ...]
    source_start: int
    source_end: int
    raw: str
    inverted: bool = False   # sections only: {{^ ...}}
    closing: bool = False    # sections only: {{/ ...}}

    @property
    def is_section_open(self) -> bool:
        return self.kind is DirectiveKind.SECTION and not self.closing

    @property
    def is_section_close(self) -> bool:
        return self.kind is DirectiveKind.SECTION and self.closing

    def __repr__(self) -> str:
        return f"Directive({self.kind.name}, {self.keypath!r}, {self.source_start}:{self.source_end})"


def split_formula(formula: str) -> Tuple[str, Tuple[str, ...]]:
    """Split a directive body into keypath and formatter calls."""
    parts = [part.strip() for part in formula.split(FORMATTER_SEPARATOR)]
    return parts[0], tuple(parts[1:])


__all__ = [
    "FORMATTER_SEPARATOR",
    "DirectiveKind",
    "Directive",
    "split_formula",
]
