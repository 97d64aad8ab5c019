"""HTML DOM Parser.

A forgiving HTML parser that turns any markup string into a traversable
document tree. Scanning and tree building never fail: malformed markup yields
a degraded tree plus diagnostics.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file()
- Level 2: Configured parser - HTMLParser class with ParserConfig
- Level 3: Pipeline stages - scan() and build() over token sequences
"""

__version__ = "0.1.0"
__author__ = "HTML DOM Parser Team"

from .shared.config import ParserConfig
from .elements import ElementKind, UnknownElement, from_tag_name
from .tokenization import Token, TokenType, scan
from .tree import Node, NodeType, ParseResult, build
from .query import (
    get_element_by_id,
    get_elements_by_class,
    get_elements_by_tag,
    inner_html,
    outer_html,
)
from .api import HTMLParser, parse, parse_file, parse_string

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_string",
    "parse_file",

    # Level 2: Configured parser
    "HTMLParser",
    "ParserConfig",

    # Level 3: Pipeline stages
    "scan",
    "build",

    # Result objects and data structures
    "ParseResult",
    "Node",
    "NodeType",
    "Token",
    "TokenType",
    "ElementKind",
    "UnknownElement",
    "from_tag_name",

    # Queries and serialization
    "get_element_by_id",
    "get_elements_by_class",
    "get_elements_by_tag",
    "outer_html",
    "inner_html",
]
