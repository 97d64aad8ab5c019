"""Lookups over a built tree.

All lookups walk the tree in pre-order (a node before its children, children
left to right) starting with, and including, the node they are given.
Traversal is iterative, so deeply nested documents do not hit the recursion
limit.
"""

from typing import Iterator, List, Optional, Union

from html_dom_parser.elements import AnyElementKind, from_tag_name
from html_dom_parser.tree.node import Node, NodeType


def iter_preorder(root: Node) -> Iterator[Node]:
    """Yield ``root`` and all of its descendants in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_elements(root: Node) -> Iterator[Node]:
    """Yield element nodes only, in document order."""
    return (node for node in iter_preorder(root) if node.node_type is NodeType.ELEMENT)


def get_element_by_id(root: Node, id_value: str) -> Optional[Node]:
    """Return the first element whose ``id`` attribute equals ``id_value``."""
    for node in iter_elements(root):
        if node.attributes.get("id") == id_value:
            return node
    return None


def get_elements_by_class(root: Node, class_name: str) -> List[Node]:
    """Return every element whose class list contains ``class_name`` exactly.

    The ``class`` attribute is split on whitespace; ``"bg"`` does not match
    ``class="bg-red"``.
    """
    return [
        node for node in iter_elements(root)
        if class_name in node.attributes.get("class", "").split()
    ]


def get_elements_by_tag(root: Node, kind: Union[AnyElementKind, str]) -> List[Node]:
    """Return every element of the given kind.

    A string is resolved through the element catalog first, so ``"DIV"``
    finds ``ElementKind.DIV`` while ``"div-like"`` only finds
    ``UnknownElement("div-like")``.
    """
    if isinstance(kind, str):
        kind = from_tag_name(kind)
    return [node for node in iter_elements(root) if node.element == kind]
