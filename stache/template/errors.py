"""
Template compilation errors.

Every error aborts the compile call in progress; nothing is auto-corrected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import StacheUserError


def _snippet(text: str, limit: int = 40) -> str:
    text = text.replace("\n", "\\n")
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class TemplateCompileError(StacheUserError):
    """Base class for template compilation errors."""
    pass


@dataclass
class UnmatchedSectionError(TemplateCompileError):
    """Section open without a balancing close, or a close without an open."""
    keypath: str
    source: str = ""
    stray_close: bool = False

    def __str__(self) -> str:
        where = f" near {_snippet(self.source)!r}" if self.source else ""
        if self.stray_close:
            return f"Unexpected closing section '{self.keypath}'{where}"
        return f"Unmatched section '{self.keypath}'{where}: no closing directive before end of input"


@dataclass
class UnbalancedTripleError(TemplateCompileError):
    """Triple directive whose outer braces do not match on both sides."""
    source: str
    position: int

    def __str__(self) -> str:
        return f"Unbalanced triple braces in {_snippet(self.source)!r} at offset {self.position}"


@dataclass
class MalformedDirectiveError(TemplateCompileError):
    """Stub or directive kind the compiler does not know how to handle."""
    description: str

    def __str__(self) -> str:
        return f"Error compiling template: unsupported {self.description}"


class InvalidScanError(ValueError):
    """Tokenizer called with an invalid cursor. Programming error, not a template error."""

    def __init__(self, message: str, start: Optional[object] = None):
        super().__init__(message)
        self.start = start


class TemplateProcessingError(TemplateCompileError):
    """Compile failure annotated with the template it happened in."""

    def __init__(self, message: str, template_name: str = "", cause: Optional[Exception] = None):
        if template_name:
            super().__init__(f"Template processing error in '{template_name}': {message}")
        else:
            super().__init__(f"Template processing error: {message}")
        self.template_name = template_name
        self.cause = cause


__all__ = [
    "TemplateCompileError",
    "UnmatchedSectionError",
    "UnbalancedTripleError",
    "MalformedDirectiveError",
    "InvalidScanError",
    "TemplateProcessingError",
]
