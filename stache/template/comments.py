"""
Comment stripping.

Mustache comments look like ``{{! text }}``. A comment that sits alone on its
line takes the whole line with it; any other comment is simply removed.
"""

from __future__ import annotations

import re

_COMMENT = re.compile(r"\{\{!\s*[\s\S]+?\s*\}\}")

# Boundary before the comment: start of input or a line break (kept in output).
# Boundary after: end of input or a line break (dropped).
_LINE_COMMENT = re.compile(
    r"(^|\n|\r\n)\s*\{\{!\s*[\s\S]+?\s*\}\}\s*(\Z|\n|\r\n)"
)


def strip_comments(text: str) -> str:
    """
    Remove comment directives from raw template text.

    Examples:
        >>> strip_comments("{{! drop me }}\\nkeep")
        'keep'
        >>> strip_comments("a {{!inline}}b")
        'a b'
    """
    output = text
    # Removing a comment can splice together a new one ("{{{{!a}}!b}}"),
    # so repeat until nothing changes.
    while True:
        stripped = _COMMENT.sub("", _LINE_COMMENT.sub(lambda m: m.group(1), output))
        if stripped == output:
            return stripped
        output = stripped


__all__ = ["strip_comments"]
