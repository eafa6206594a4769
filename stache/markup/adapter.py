"""
HTML markup adapter.

Parses template markup with Tree-sitter and converts the syntax tree into the
read-only node model the compiler consumes. Text is taken from the exact
source spans between structural nodes, so whitespace survives and directives
are never split by the grammar's own text tokens.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Iterator, List, Optional, Sequence, Tuple

from tree_sitter import Language, Node, Parser, Tree

from .nodes import MarkupComment, MarkupElement, MarkupNode, MarkupText

logger = logging.getLogger(__name__)

DEFAULT_RENAMED_ATTRIBUTES: Tuple[str, ...] = ("src", "poster")
DEFAULT_RENAME_PREFIX = "data-stache-"

_ELEMENT_TYPES = {"element", "script_element", "style_element"}
_SKIPPED_TYPES = {"comment", "doctype"}
_DROPPED_TYPES = {"erroneous_end_tag"}
_TAG_TYPES = {"start_tag", "self_closing_tag"}


def rename_attributes(source: str, names: Sequence[str], prefix: str) -> str:
    """
    Prefix the given attribute names inside tags.

    ``<img src="{{url}}">`` becomes ``<img data-stache-src="{{url}}">`` so a
    host never requests the unrendered URL. The compiler strips the prefix.
    """
    for name in names:
        pattern = re.compile(r"(<[^>]+\s)(" + re.escape(name) + r"=)")
        source = pattern.sub(lambda m: m.group(1) + prefix + m.group(2), source)
    return source


class HtmlDocument:
    """
    Wrapper for a Tree-sitter parsed HTML fragment.
    """

    def __init__(self, text: str):
        self.text = text
        self.tree: Optional[Tree] = None
        self._text_bytes = text.encode("utf-8")
        self._parse()

    @staticmethod
    def get_language() -> Language:
        import tree_sitter_html as tshtml
        return Language(tshtml.language())

    def get_parser(self) -> Parser:
        return Parser(self.get_language())

    def _parse(self):
        """Parse the document with Tree-sitter."""
        parser = self.get_parser()
        self.tree = parser.parse(self._text_bytes)

    @property
    def root_node(self) -> Node:
        """Get the root node of the parsed tree."""
        if not self.tree:
            raise RuntimeError("Document not parsed")
        return self.tree.root_node

    def to_nodes(self) -> Tuple[MarkupNode, ...]:
        """Convert the whole document into markup nodes."""
        root = self.root_node
        if root.has_error:
            logger.debug("Markup contains syntax errors; recovering what the parser could")
        return self._convert_content(root.children, 0, len(self._text_bytes))

    # ------------------------------------------------------------ internals

    def _slice(self, start: int, end: int) -> str:
        return self._text_bytes[start:end].decode("utf-8")

    def _convert_content(self, children: Sequence[Node], start: int, end: int) -> Tuple[MarkupNode, ...]:
        """
        Convert the content between ``start`` and ``end`` bytes.

        Everything that is not an element, comment or dropped tag becomes text.
        """
        result: List[MarkupNode] = []
        cursor = start

        for child in _structural(children):
            self._flush_text(result, cursor, child.start_byte)
            cursor = child.end_byte
            if child.type in _ELEMENT_TYPES:
                result.append(self._convert_element(child))
            elif child.type in _SKIPPED_TYPES:
                result.append(MarkupComment(self._slice(child.start_byte, child.end_byte)))

        self._flush_text(result, cursor, end)
        return tuple(result)

    def _flush_text(self, result: List[MarkupNode], start: int, end: int) -> None:
        if end > start:
            result.append(MarkupText(html.unescape(self._slice(start, end))))

    def _convert_element(self, node: Node) -> MarkupElement:
        tag_node: Optional[Node] = None
        end_tag: Optional[Node] = None
        content: List[Node] = []

        for child in node.children:
            if child.type in _TAG_TYPES and tag_node is None:
                tag_node = child
            elif child.type == "end_tag":
                end_tag = child
            else:
                content.append(child)

        if tag_node is None:
            # Recovered element without an opening tag: keep its content only
            return MarkupElement(tag="", children=self._convert_content(content, node.start_byte, node.end_byte))

        tag, attributes = self._read_tag(tag_node)
        if tag_node.type == "self_closing_tag":
            return MarkupElement(tag=tag, attributes=attributes)

        content_end = end_tag.start_byte if end_tag is not None else node.end_byte
        children = self._convert_content(content, tag_node.end_byte, content_end)
        return MarkupElement(tag=tag, attributes=attributes, children=children)

    def _read_tag(self, tag_node: Node) -> Tuple[str, Tuple[Tuple[str, str], ...]]:
        tag = ""
        attributes: List[Tuple[str, str]] = []
        for child in tag_node.children:
            if child.type == "tag_name":
                tag = self._slice(child.start_byte, child.end_byte)
            elif child.type == "attribute":
                attributes.append(self._read_attribute(child))
        return tag, tuple(attributes)

    def _read_attribute(self, node: Node) -> Tuple[str, str]:
        name = ""
        value = ""
        for child in node.children:
            if child.type == "attribute_name":
                name = self._slice(child.start_byte, child.end_byte)
            elif child.type == "attribute_value":
                value = self._slice(child.start_byte, child.end_byte)
            elif child.type == "quoted_attribute_value":
                # Value without the surrounding quotes
                value = self._slice(child.start_byte + 1, child.end_byte - 1)
        return name, html.unescape(value)


def _structural(children: Sequence[Node]) -> Iterator[Node]:
    """
    Yield elements, comments and dropped tags.

    Error nodes and elements invented by error recovery are transparent, so
    their source stays text for the enclosing span.
    """
    for child in children:
        if child.type == "ERROR":
            yield from _structural(child.children)
        elif _is_recovered_element(child):
            for part in child.children:
                if part.type == "end_tag":
                    # Unmatched in HTML; dropped like an erroneous end tag
                    yield part
                else:
                    yield from _structural((part,))
        elif child.type in _ELEMENT_TYPES or child.type in _SKIPPED_TYPES or child.type in _DROPPED_TYPES:
            yield child


def _is_recovered_element(node: Node) -> bool:
    """
    True for an element whose opening tag is not ``<`` directly followed by
    its name (``a < b`` is text in HTML), or whose tag needed repairs.
    """
    if node.type not in _ELEMENT_TYPES:
        return False
    tag_node = next((c for c in node.children if c.type in _TAG_TYPES), None)
    if tag_node is None:
        return False
    if tag_node.has_error:
        return True
    tag_name = next((c for c in tag_node.children if c.type == "tag_name"), None)
    return tag_name is None or tag_name.start_byte != tag_node.start_byte + 1


def parse_markup(
    source: str,
    rename: Sequence[str] = DEFAULT_RENAMED_ATTRIBUTES,
    rename_prefix: str = DEFAULT_RENAME_PREFIX,
) -> Tuple[MarkupNode, ...]:
    """
    Parse HTML markup into a list of top-level markup nodes.

    Args:
        source: Markup source (comments already stripped)
        rename: Attribute names to prefix before parsing
        rename_prefix: Prefix for renamed attributes

    Returns:
        Top-level nodes in source order
    """
    if rename and rename_prefix:
        source = rename_attributes(source, rename, rename_prefix)
    return HtmlDocument(source).to_nodes()


__all__ = [
    "DEFAULT_RENAMED_ATTRIBUTES",
    "DEFAULT_RENAME_PREFIX",
    "HtmlDocument",
    "rename_attributes",
    "parse_markup",
]
