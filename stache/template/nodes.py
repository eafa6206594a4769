"""
Compiled AST nodes.

Immutable value tree produced by the compiler and consumed by a renderer.
Every node owns its children; nothing is shared or back-referenced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class TextNode:
    """Literal text, emitted as-is."""
    text: str


@dataclass(frozen=True)
class InterpolatorNode:
    """Escaped value output: ``{{ keypath }}``."""
    keypath: str
    formatters: Tuple[str, ...]
    level: int


@dataclass(frozen=True)
class TripleNode:
    """Unescaped value output: ``{{{ keypath }}}``."""
    keypath: str
    formatters: Tuple[str, ...]
    level: int


@dataclass(frozen=True)
class PartialNode:
    """Partial reference: ``{{> name }}``. Resolution happens downstream."""
    keypath: str


@dataclass(frozen=True)
class SectionNode:
    """
    Section body bound to a keypath.

    Inverted sections (``{{^ keypath }}``) render their body when the value
    is falsy or empty.
    """
    keypath: str
    formatters: Tuple[str, ...]
    inverted: bool
    children: Tuple["CompiledNode", ...]
    level: int


@dataclass(frozen=True)
class Attribute:
    """
    Element attribute.

    Static attributes carry ``value``. Dynamic ones (values containing
    directives) carry the recompiled value in ``components`` and a ``level``.
    """
    name: str
    value: Optional[str] = None
    is_dynamic: bool = False
    components: Tuple["CompiledNode", ...] = ()
    level: Optional[int] = None


@dataclass(frozen=True)
class ElementNode:
    """Element with compiled attributes and children."""
    tag: str
    attributes: Tuple[Attribute, ...]
    children: Tuple["CompiledNode", ...]
    level: int
    namespace: Optional[str] = None


CompiledNode = Union[TextNode, InterpolatorNode, TripleNode, PartialNode, SectionNode, ElementNode]

# Alias for a compiled sequence of nodes (AST)
TemplateAST = Tuple[CompiledNode, ...]


__all__ = [
    "TextNode",
    "InterpolatorNode",
    "TripleNode",
    "PartialNode",
    "SectionNode",
    "Attribute",
    "ElementNode",
    "CompiledNode",
    "TemplateAST",
]
