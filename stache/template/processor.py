"""
Template compiler facade.

Runs the whole pipeline for one template: comment stripping, markup parsing,
flattening and section-aware compilation.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .comments import strip_comments
from .compiler import StubCompiler
from .errors import TemplateCompileError, TemplateProcessingError
from .nodes import TemplateAST
from .stubs import stubs_from_nodes
from ..config import CompilerOptions
from ..markup.adapter import parse_markup
from ..markup.nodes import MarkupNode

logger = logging.getLogger(__name__)


class TemplateCompiler:
    """
    Compiles template source into an AST.

    Keeps no state between calls: each compile owns its stubs and returns an
    independent tree.
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()
        self.stub_compiler = StubCompiler(
            rename_prefix=self.options.rename_prefix,
            strict=self.options.strict_triples,
        )

    def compile(self, source: str, template_name: str = "") -> TemplateAST:
        """
        Compile template source.

        Args:
            source: Template text (markup with directives)
            template_name: Name used in error messages

        Raises:
            TemplateProcessingError: wrapping the compile error that aborted compilation
        """
        if self.options.strip_comments:
            source = strip_comments(source)

        nodes = parse_markup(
            source,
            rename=self.options.rename_attributes,
            rename_prefix=self.options.rename_prefix,
        )
        logger.debug("Parsed %d top-level markup nodes for '%s'", len(nodes), template_name or "<string>")
        return self.compile_nodes(nodes, template_name)

    def compile_nodes(self, nodes: Sequence[MarkupNode], template_name: str = "") -> TemplateAST:
        """Compile an already parsed markup tree."""
        try:
            stubs = stubs_from_nodes(nodes, strict=self.options.strict_triples)
            return self.stub_compiler.compile(
                stubs,
                level=0,
                namespace=None,
                preserve_whitespace=self.options.preserve_whitespace,
            )
        except TemplateProcessingError:
            raise
        except TemplateCompileError as e:
            raise TemplateProcessingError(str(e), template_name, e) from e


def compile_template(source: str, options: Optional[CompilerOptions] = None, template_name: str = "") -> TemplateAST:
    """
    Compile template source with the given options.

    Example:
        >>> ast = compile_template("<p>{{name}}</p>")
        >>> ast[0].children[0].keypath
        'name'
    """
    return TemplateCompiler(options).compile(source, template_name)


__all__ = ["TemplateCompiler", "compile_template"]
