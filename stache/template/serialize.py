"""
Plain-data view of the compiled AST, for JSON output.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional

from .nodes import (
    Attribute, CompiledNode, ElementNode, InterpolatorNode, PartialNode,
    SectionNode, TextNode, TripleNode,
)
from .tokens import Directive


def to_data(nodes: Iterable[CompiledNode]) -> List[Dict[str, Any]]:
    """Convert a compiled node sequence into JSON-compatible dicts."""
    return [node_to_data(node) for node in nodes]


def node_to_data(node: CompiledNode) -> Dict[str, Any]:
    if isinstance(node, TextNode):
        return {"type": "text", "text": node.text}

    if isinstance(node, (InterpolatorNode, TripleNode)):
        data: Dict[str, Any] = {
            "type": "interpolator" if isinstance(node, InterpolatorNode) else "triple",
            "keypath": node.keypath,
        }
        if node.formatters:
            data["formatters"] = list(node.formatters)
        data["level"] = node.level
        return data

    if isinstance(node, PartialNode):
        return {"type": "partial", "keypath": node.keypath}

    if isinstance(node, SectionNode):
        data = {"type": "section", "keypath": node.keypath}
        if node.formatters:
            data["formatters"] = list(node.formatters)
        data["inverted"] = node.inverted
        data["children"] = to_data(node.children)
        data["level"] = node.level
        return data

    if isinstance(node, ElementNode):
        data = {"type": "element", "tag": node.tag}
        if node.namespace:
            data["namespace"] = node.namespace
        data["attributes"] = [attribute_to_data(a) for a in node.attributes]
        data["children"] = to_data(node.children)
        data["level"] = node.level
        return data

    raise TypeError(f"Unknown node type: {type(node).__name__}")


def attribute_to_data(attribute: Attribute) -> Dict[str, Any]:
    if not attribute.is_dynamic:
        return {"name": attribute.name, "value": attribute.value}
    return {
        "name": attribute.name,
        "isDynamic": True,
        "components": to_data(attribute.components),
        "level": attribute.level,
    }


def directive_to_data(directive: Directive) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "type": directive.kind.value,
        "keypath": directive.keypath,
        "formatters": list(directive.formatters),
        "start": directive.source_start,
        "end": directive.source_end,
    }
    if directive.inverted:
        data["inverted"] = True
    if directive.closing:
        data["closing"] = True
    return data


def to_json(data: Any, indent: Optional[int] = None) -> str:
    """Render plain data as JSON without a trailing newline; non-ASCII kept as is."""
    return json.dumps(data, ensure_ascii=False, indent=indent)


__all__ = ["to_data", "node_to_data", "attribute_to_data", "directive_to_data", "to_json"]
