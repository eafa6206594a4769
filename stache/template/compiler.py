"""
Section-aware compiler.

Turns a flat stub sequence (text, elements and directives interleaved) into
the compiled AST: sections are matched by keypath, elements are compiled
recursively and attribute values containing directives are recompiled as
stub sequences of their own.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .errors import MalformedDirectiveError, UnmatchedSectionError
from .lexer import has_directive
from .nodes import (
    Attribute, CompiledNode, ElementNode, InterpolatorNode, PartialNode,
    SectionNode, TemplateAST, TextNode, TripleNode,
)
from .stubs import DirectiveStub, ElementStub, Stub, TextStub, expand_text, stub_source, stubs_from_nodes
from .tokens import Directive, DirectiveKind
from ..markup.adapter import DEFAULT_RENAME_PREFIX
from ..markup.nodes import MarkupElement

logger = logging.getLogger(__name__)

XMLNS_ATTRIBUTE = "xmlns"


class StubCompiler:
    """
    Compiler for stub sequences.

    Holds only settings; every call works on its own input and returns a new
    tree, so one instance can be reused freely.
    """

    def __init__(self, rename_prefix: str = DEFAULT_RENAME_PREFIX, strict: bool = False):
        """
        Args:
            rename_prefix: Prefix the markup adapter put in front of renamed attributes
            strict: Raise on unbalanced triple braces instead of passing them through
        """
        self.rename_prefix = rename_prefix
        self.strict = strict

    # ---------------------------------------------------------------- stubs

    def compile(
        self,
        stubs: Sequence[Stub],
        level: int = 0,
        namespace: Optional[str] = None,
        preserve_whitespace: bool = False,
    ) -> TemplateAST:
        """
        Compile a stub sequence.

        Raises:
            UnmatchedSectionError: section without a balancing close, or a stray close
            MalformedDirectiveError: stub or directive kind that cannot be compiled
        """
        compiled: List[CompiledNode] = []
        i = 0
        while i < len(stubs):
            stub = stubs[i]

            if isinstance(stub, TextStub):
                if preserve_whitespace or not _is_blank(stub.text):
                    compiled.append(TextNode(stub.text))
                i += 1

            elif isinstance(stub, ElementStub):
                compiled.append(self.compile_element(stub.node, level, namespace))
                i += 1

            elif isinstance(stub, DirectiveStub):
                directive = stub.directive
                if directive.kind is DirectiveKind.SECTION:
                    end = _find_section_end(stubs, i)
                    compiled.append(SectionNode(
                        keypath=directive.keypath,
                        formatters=directive.formatters,
                        inverted=directive.inverted,
                        children=self.compile(
                            stubs[i + 1:end], level + 1, namespace, preserve_whitespace
                        ),
                        level=level,
                    ))
                    i = end + 1
                else:
                    compiled.append(_compile_leaf(directive, level))
                    i += 1

            else:
                raise MalformedDirectiveError(f"stub {stub!r}")

        return tuple(compiled)

    # ------------------------------------------------------------- elements

    def compile_element(
        self,
        node: MarkupElement,
        level: int,
        namespace: Optional[str] = None,
    ) -> ElementNode:
        """
        Compile one element, its attributes and (recursively) its children.

        Whitespace-only text between child nodes is always dropped; only
        section bodies inherit the caller's whitespace policy.
        """
        attributes: List[Attribute] = []
        for name, value in node.attributes:
            if name == XMLNS_ATTRIBUTE:
                namespace = value
            else:
                attributes.append(self.process_attribute(name, value, level + 1))

        children = self.compile(
            stubs_from_nodes(node.children, strict=self.strict),
            level + 1,
            namespace,
        )

        return ElementNode(
            tag=node.tag,
            attributes=tuple(attributes),
            children=children,
            level=level,
            namespace=namespace,
        )

    def process_attribute(self, name: str, value: str, level: int) -> Attribute:
        """
        Compile an attribute.

        Values without directives stay static. Values with directives are
        expanded and compiled with whitespace preserved and no namespace.
        """
        if self.rename_prefix and name.startswith(self.rename_prefix):
            name = name[len(self.rename_prefix):]

        if not has_directive(value, strict=self.strict):
            return Attribute(name=name, value=value)

        components = self.compile(
            expand_text(value, strict=self.strict),
            level,
            namespace=None,
            preserve_whitespace=True,
        )
        return Attribute(name=name, is_dynamic=True, components=components, level=level)


def _is_blank(text: str) -> bool:
    return not text.strip()


def _compile_leaf(directive: Directive, level: int) -> CompiledNode:
    if directive.kind is DirectiveKind.INTERPOLATOR:
        return InterpolatorNode(directive.keypath, directive.formatters, level)
    if directive.kind is DirectiveKind.TRIPLE:
        return TripleNode(directive.keypath, directive.formatters, level)
    if directive.kind is DirectiveKind.PARTIAL:
        return PartialNode(directive.keypath)
    raise MalformedDirectiveError(f"directive kind {directive.kind!r} in {directive.raw!r}")


def _find_section_end(stubs: Sequence[Stub], start: int) -> int:
    """
    Index of the close that balances the section opened at ``start``.

    Only sections with exactly the same keypath move the depth counter:
    every open (inverted or not) increments it, every close decrements it.
    """
    opening = stubs[start].directive  # type: ignore[union-attr]
    if opening.closing:
        raise UnmatchedSectionError(opening.keypath, opening.raw, stray_close=True)

    depth = 1
    for i in range(start + 1, len(stubs)):
        stub = stubs[i]
        if not isinstance(stub, DirectiveStub):
            continue
        directive = stub.directive
        if directive.kind is not DirectiveKind.SECTION or directive.keypath != opening.keypath:
            continue
        depth += -1 if directive.closing else 1
        if depth == 0:
            logger.debug("Section '%s' spans stubs %d..%d", opening.keypath, start, i)
            return i

    raise UnmatchedSectionError(opening.keypath, _context(stubs, start))


def _context(stubs: Sequence[Stub], start: int, limit: int = 3) -> str:
    return "".join(stub_source(stub) for stub in stubs[start:start + limit])


def compile_stubs(
    stubs: Sequence[Stub],
    level: int = 0,
    namespace: Optional[str] = None,
    preserve_whitespace: bool = False,
) -> TemplateAST:
    """Compile a stub sequence with default settings."""
    return StubCompiler().compile(stubs, level, namespace, preserve_whitespace)


def process_attribute(
    name: str,
    value: str,
    level: int,
    rename_prefix: str = DEFAULT_RENAME_PREFIX,
) -> Attribute:
    """Compile a single attribute with default settings."""
    return StubCompiler(rename_prefix=rename_prefix).process_attribute(name, value, level)


__all__ = [
    "XMLNS_ATTRIBUTE",
    "StubCompiler",
    "compile_stubs",
    "process_attribute",
]
