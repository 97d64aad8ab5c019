"""Markup serialization of a built tree.

Elements serialize as ``<tag attr="value">``, their children, then
``</tag>``. Void elements emit neither children nor a closing tag. Text and
comment nodes are written back exactly as they were scanned; no escaping is
applied.

Attributes are written sorted by key unless insertion order is requested.
Keys written without a value in the source come back bare (``required``),
while an explicit empty value comes back as ``key=""``.
"""

from typing import List, Optional, Union

from html_dom_parser.shared.config import ATTRIBUTE_ORDERS
from html_dom_parser.tree.node import Node, NodeType


def _quote(value: str) -> str:
    if '"' in value and "'" not in value:
        return f"'{value}'"
    return f'"{value}"'


def opening_tag(node: Node, attribute_order: str = "sorted") -> str:
    """Render the opening tag of an element node."""
    names = list(node.attributes)
    if attribute_order == "sorted":
        names.sort()

    parts = [node.tag_name or ""]
    for name in names:
        if name in node.boolean_attributes:
            parts.append(name)
        else:
            parts.append(f"{name}={_quote(node.attributes[name])}")
    return "<" + " ".join(parts) + ">"


def _write(node: Node, out: List[str], attribute_order: str) -> None:
    stack: List[Union[Node, str]] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
        elif item.node_type in (NodeType.TEXT, NodeType.COMMENT):
            out.append(item.data or "")
        elif item.node_type is NodeType.DOCUMENT:
            stack.extend(reversed(item.children))
        else:
            out.append(opening_tag(item, attribute_order))
            if item.is_void:
                continue
            stack.append(f"</{item.tag_name}>")
            stack.extend(reversed(item.children))


def _check_order(attribute_order: str) -> None:
    if attribute_order not in ATTRIBUTE_ORDERS:
        raise ValueError(f"attribute_order must be one of {list(ATTRIBUTE_ORDERS)}")


def outer_html(node: Node, attribute_order: str = "sorted") -> Optional[str]:
    """Serialize an element and its subtree.

    Returns:
        The markup, or None when ``node`` is not an element
    """
    _check_order(attribute_order)
    if node.node_type is not NodeType.ELEMENT:
        return None
    out: List[str] = []
    _write(node, out, attribute_order)
    return "".join(out)


def inner_html(node: Node, attribute_order: str = "sorted") -> Optional[str]:
    """Serialize the children of an element or document.

    Returns:
        The markup, or None for text and comment nodes
    """
    _check_order(attribute_order)
    if node.node_type in (NodeType.TEXT, NodeType.COMMENT):
        return None
    out: List[str] = []
    if not node.is_void:
        for child in node.children:
            _write(child, out, attribute_order)
    return "".join(out)
