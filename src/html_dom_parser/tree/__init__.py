"""Tree building engine for HTML DOM parsing.

Key Components:
    HTMLTreeBuilder: Builds a document tree from a token stream
    build: Convenience function returning the document root
    Node: Document, element, text or comment node with weak parent links
    NodeType: Enumeration of node kinds
    ParseResult: Document root plus diagnostics and performance metrics
"""

from .node import Node, NodeType
from .builder import HTMLTreeBuilder, ParseResult, build

__all__ = [
    "HTMLTreeBuilder",
    "Node",
    "NodeType",
    "ParseResult",
    "build",
]
