"""
Markup layer: read-only node model and the HTML adapter that builds it.
"""

from __future__ import annotations

from .adapter import parse_markup, rename_attributes, HtmlDocument
from .nodes import MarkupComment, MarkupElement, MarkupNode, MarkupText

__all__ = [
    "MarkupComment",
    "MarkupElement",
    "MarkupNode",
    "MarkupText",
    "HtmlDocument",
    "parse_markup",
    "rename_attributes",
]
