"""
Mustache tokenizer.

Finds directives inside a text run. The scan position is always an explicit
argument: the compiled pattern is only ever used through ``search(text, pos)``,
so repeated or interleaved scans of different strings never share state.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional

from .errors import InvalidScanError, UnbalancedTripleError
from .tokens import Directive, DirectiveKind, split_formula

logger = logging.getLogger(__name__)

# Groups: 1 leading brace, 2 section sigil, 3 partial sigil, 4 ampersand,
# 5 body, 6 trailing brace.
_MUSTACHE = re.compile(
    r"(\{)?\{\{([#^/])?(>)?(&)?\s*([\s\S]+?)\s*\}\}(\})?"
)


def _check_cursor(text: str, start: int) -> None:
    if not isinstance(text, str):
        raise InvalidScanError(f"Expected text to scan, got {type(text).__name__}", start)
    if isinstance(start, bool) or not isinstance(start, int):
        raise InvalidScanError(f"Scan start must be an integer, got {start!r}", start)
    if start < 0 or start > len(text):
        raise InvalidScanError(
            f"Scan start {start} is outside of text (length {len(text)})", start
        )


def _classify(match: re.Match) -> Directive:
    """
    Build a directive from a raw pattern match.

    Raises:
        UnbalancedTripleError: if only one side carries the extra brace
    """
    leading, sigil, partial, ampersand, body, trailing = match.groups()
    start, end = match.start(), match.end()

    if bool(leading) != bool(trailing):
        raise UnbalancedTripleError(match.group(0), start)

    keypath, formatters = split_formula(body)

    if sigil:
        return Directive(
            kind=DirectiveKind.SECTION,
            keypath=keypath,
            formatters=formatters,
            source_start=start,
            source_end=end,
            raw=match.group(0),
            inverted=sigil == "^",
            closing=sigil == "/",
        )

    if partial:
        kind = DirectiveKind.PARTIAL
    elif leading:
        kind = DirectiveKind.TRIPLE
    else:
        if ampersand:
            # Legacy marker: accepted by the grammar, compiled as a plain interpolator
            logger.debug("Treating '&' directive %r as a plain interpolator", match.group(0))
        kind = DirectiveKind.INTERPOLATOR

    return Directive(
        kind=kind,
        keypath=keypath,
        formatters=formatters,
        source_start=start,
        source_end=end,
        raw=match.group(0),
    )


def find_directive(text: str, start: int = 0, strict: bool = False) -> Optional[Directive]:
    """
    Find the first directive at or after ``start``.

    Matches with unbalanced triple braces and matches with an empty keypath are
    not directives: they are skipped as ordinary text and scanning resumes
    after them.

    Args:
        text: String to scan
        start: Offset to start scanning from
        strict: Raise on unbalanced triple braces instead of skipping them

    Returns:
        The directive, or None if the rest of the text has none

    Raises:
        InvalidScanError: for an invalid cursor
        UnbalancedTripleError: in strict mode only
    """
    _check_cursor(text, start)

    pos = start
    while True:
        match = _MUSTACHE.search(text, pos)
        if match is None:
            return None

        pos = match.end()
        try:
            directive = _classify(match)
        except UnbalancedTripleError:
            if strict:
                raise
            logger.debug("Skipping unbalanced triple %r at offset %d", match.group(0), match.start())
            continue

        if not directive.keypath:
            logger.debug("Skipping directive without keypath %r at offset %d", match.group(0), match.start())
            continue

        return directive


def iter_directives(text: str, start: int = 0, strict: bool = False) -> Iterator[Directive]:
    """Yield every directive of ``text`` in source order."""
    pos = start
    while True:
        directive = find_directive(text, pos, strict=strict)
        if directive is None:
            return
        yield directive
        pos = directive.source_end


def has_directive(text: str, strict: bool = False) -> bool:
    """Check whether ``text`` contains at least one directive."""
    return find_directive(text, strict=strict) is not None


__all__ = [
    "find_directive",
    "iter_directives",
    "has_directive",
]
