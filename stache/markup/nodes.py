"""
Read-only markup node model.

This is the boundary between a markup parser and the template compiler:
elements with a tag name, ordered attributes and children, and text nodes
with raw character data. Comments are carried for fidelity but ignored when
the tree is flattened.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class MarkupText:
    """Raw character data."""
    data: str


@dataclass(frozen=True)
class MarkupComment:
    """Markup comment, doctype or other non-content node."""
    data: str


@dataclass(frozen=True)
class MarkupElement:
    """Element with attributes in source order."""
    tag: str
    attributes: Tuple[Tuple[str, str], ...] = ()
    children: Tuple["MarkupNode", ...] = ()

    def get_attribute(self, name: str) -> Optional[str]:
        for attr_name, value in self.attributes:
            if attr_name == name:
                return value
        return None


MarkupNode = Union[MarkupElement, MarkupText, MarkupComment]


__all__ = ["MarkupText", "MarkupComment", "MarkupElement", "MarkupNode"]
