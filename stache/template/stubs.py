"""
Stubs: intermediate fragments between the markup tree and the compiled AST.

A text run is expanded into text and directive stubs; elements are wrapped
as-is and compiled later.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from .lexer import find_directive
from .tokens import Directive
from ..markup.nodes import MarkupElement, MarkupText


@dataclass(frozen=True)
class TextStub:
    text: str


@dataclass(frozen=True)
class ElementStub:
    node: MarkupElement


@dataclass(frozen=True)
class DirectiveStub:
    directive: Directive


Stub = Union[TextStub, ElementStub, DirectiveStub]


def expand_text(text: str, strict: bool = False) -> Tuple[Stub, ...]:
    """
    Split a text run into text and directive stubs.

    The result covers ``text`` exactly: joining the text stubs and the raw
    directive spans in order gives back the input. Input without directives
    becomes a single text stub (even when empty).
    """
    result: List[Stub] = []
    pos = 0

    while True:
        directive = find_directive(text, pos, strict=strict)
        if directive is None:
            break
        if directive.source_start > pos:
            result.append(TextStub(text[pos:directive.source_start]))
        result.append(DirectiveStub(directive))
        pos = directive.source_end

    if pos < len(text) or not result:
        result.append(TextStub(text[pos:]))

    return tuple(result)


def stubs_from_nodes(nodes: Iterable[object], strict: bool = False) -> Tuple[Stub, ...]:
    """
    Flatten a list of sibling markup nodes into stubs.

    Elements are kept whole, text nodes are expanded, any other node kind is
    skipped.
    """
    result: List[Stub] = []
    for node in nodes:
        if isinstance(node, MarkupElement):
            result.append(ElementStub(node))
        elif isinstance(node, MarkupText):
            result.extend(expand_text(node.data, strict=strict))
    return tuple(result)


def stub_source(stub: Stub) -> str:
    """Source text a text or directive stub was built from."""
    if isinstance(stub, TextStub):
        return stub.text
    if isinstance(stub, DirectiveStub):
        return stub.directive.raw
    return f"<{stub.node.tag}>"


__all__ = [
    "TextStub",
    "ElementStub",
    "DirectiveStub",
    "Stub",
    "expand_text",
    "stubs_from_nodes",
    "stub_source",
]
