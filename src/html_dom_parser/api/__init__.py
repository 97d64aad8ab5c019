"""Public parsing API and integration adapters.

Key Components:
    parse, parse_string, parse_file: One-call parsing functions
    HTMLParser: Reusable configured parser with usage statistics
    get_adapter, list_available_adapters: Conversion to other markup libraries
"""

from .parser import HTMLParser, parse, parse_file, parse_string
from .adapters import (
    AdapterMetadata,
    BeautifulSoupAdapter,
    ConversionResult,
    ElementTreeAdapter,
    IntegrationAdapter,
    LxmlAdapter,
    get_adapter,
    list_available_adapters,
    register_adapter,
)

__all__ = [
    "HTMLParser",
    "parse",
    "parse_file",
    "parse_string",
    "AdapterMetadata",
    "BeautifulSoupAdapter",
    "ConversionResult",
    "ElementTreeAdapter",
    "IntegrationAdapter",
    "LxmlAdapter",
    "get_adapter",
    "list_available_adapters",
    "register_adapter",
]
