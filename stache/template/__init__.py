"""
Template compiler for mustache-in-markup templates.

Turns template source into an immutable AST: comments are stripped, directives
are tokenized and classified, sections are matched by keypath and attribute
values with directives are compiled recursively.
"""

from __future__ import annotations

from .comments import strip_comments
from .compiler import StubCompiler, compile_stubs, process_attribute
from .errors import (
    TemplateCompileError, UnmatchedSectionError, UnbalancedTripleError,
    MalformedDirectiveError, InvalidScanError, TemplateProcessingError,
)
from .lexer import find_directive, iter_directives, has_directive
from .nodes import (
    TextNode, InterpolatorNode, TripleNode, PartialNode, SectionNode,
    Attribute, ElementNode, CompiledNode, TemplateAST,
)
from .processor import TemplateCompiler, compile_template
from .stubs import TextStub, ElementStub, DirectiveStub, Stub, expand_text, stubs_from_nodes
from .tokens import Directive, DirectiveKind

__all__ = [
    "strip_comments",
    "find_directive",
    "iter_directives",
    "has_directive",
    "expand_text",
    "stubs_from_nodes",
    "compile_stubs",
    "process_attribute",
    "StubCompiler",
    "TemplateCompiler",
    "compile_template",
    "Directive",
    "DirectiveKind",
    "TextStub",
    "ElementStub",
    "DirectiveStub",
    "Stub",
    "TextNode",
    "InterpolatorNode",
    "TripleNode",
    "PartialNode",
    "SectionNode",
    "Attribute",
    "ElementNode",
    "CompiledNode",
    "TemplateAST",
    "TemplateCompileError",
    "UnmatchedSectionError",
    "UnbalancedTripleError",
    "MalformedDirectiveError",
    "InvalidScanError",
    "TemplateProcessingError",
]
