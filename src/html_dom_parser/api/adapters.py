"""Adapters converting parsed trees to and from other markup libraries.

Each adapter turns a Node (a document or a single element) into the target
library's object model and back. Conversions never raise: failures inside the
target library are reported through ConversionResult.errors.
"""

import html
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, Callable, Dict, List, Optional, Type

from html_dom_parser.api.parser import parse_string
from html_dom_parser.shared import DiagnosticEntry, DiagnosticSeverity, get_logger
from html_dom_parser.tree import Node, NodeType

SYNTHETIC_ROOT_TAG = "document"


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    target_library: str
    description: str


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)


def _comment_text(raw: str) -> str:
    """Strip comment delimiters from a raw comment token."""
    if raw.startswith("<!--") and raw.endswith("-->"):
        return raw[4:-3]
    if raw.startswith("<!") and raw.endswith(">"):
        return raw[2:-1]
    return raw


def _conversion_root(node: Node) -> Node:
    """Pick the node to convert: a document with one element child yields that child."""
    if node.node_type is not NodeType.DOCUMENT:
        return node
    elements = [child for child in node.children if child.is_element]
    others = [
        child for child in node.children
        if not child.is_element and not child.is_comment
    ]
    if len(elements) == 1 and not others:
        return elements[0]
    return node


def _to_etree(node: Node, etree: ModuleType) -> Any:
    """Convert a node into an ElementTree-compatible element.

    Works with both ``xml.etree.ElementTree`` and ``lxml.etree``. Text children
    become ``text``/``tail`` the way ElementTree models mixed content. Nodes
    hold raw markup while etree models hold decoded text, so character
    references in text and attribute values are unescaped on the way in.
    """
    if node.node_type is NodeType.DOCUMENT:
        target = etree.Element(SYNTHETIC_ROOT_TAG)
    else:
        target = etree.Element(node.tag_name, {
            name: html.unescape(value) for name, value in node.attributes.items()
        })

    last_child = None
    for child in node.children:
        if child.node_type is NodeType.TEXT:
            text = html.unescape(child.data or "")
            if last_child is None:
                target.text = (target.text or "") + text
            else:
                last_child.tail = (last_child.tail or "") + text
            continue
        if child.node_type is NodeType.COMMENT:
            converted = etree.Comment(_comment_text(child.data or ""))
        else:
            converted = _to_etree(child, etree)
        target.append(converted)
        last_child = converted
    return target


def _serialize_etree(root: Any, tostring: Callable[[Any], str]) -> str:
    """Serialize an etree element, unwrapping the synthetic document element.

    ``tostring`` must include each element's tail.
    """
    if root.tag != SYNTHETIC_ROOT_TAG:
        return tostring(root)
    parts = [html.escape(root.text or "", quote=False)]
    parts.extend(tostring(child) for child in root)
    return "".join(parts)


class IntegrationAdapter(ABC):
    """Base class for conversions between Node trees and a target library."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the integration adapter.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library can be imported."""

    @abstractmethod
    def _convert_to(self, node: Node) -> Any:
        """Library-specific conversion of a node."""

    @abstractmethod
    def _serialize_target(self, target_data: Any) -> str:
        """Library-specific serialization of target data to markup."""

    def to_target(self, node: Node) -> ConversionResult:
        """Convert a document or element node to the target format."""
        start_time = time.time()
        if not isinstance(node, Node):
            return self._create_error_result(
                f"Expected a Node, got {type(node).__name__}", node, 0.0
            )
        if node.node_type in (NodeType.TEXT, NodeType.COMMENT):
            return self._create_error_result(
                f"Cannot convert a {node.node_type.name} node", node, 0.0
            )
        try:
            converted = self._convert_to(node)
        except (ImportError, ValueError, TypeError, RecursionError) as e:
            return self._create_error_result(
                f"Failed to convert to {self.metadata.target_library}: {e}",
                node,
                (time.time() - start_time) * 1000,
            )
        return ConversionResult(
            success=True,
            converted_data=converted,
            original_data=node,
            conversion_time_ms=(time.time() - start_time) * 1000,
        )

    def from_target(self, target_data: Any) -> ConversionResult:
        """Serialize target data to markup and parse it into a ParseResult.

        A synthetic ``document`` wrapper added by ``to_target`` is dropped, so
        only its content is parsed.
        """
        start_time = time.time()
        try:
            markup = self._serialize_target(target_data)
        except (ImportError, ValueError, TypeError, AttributeError) as e:
            return self._create_error_result(
                f"Failed to convert from {self.metadata.target_library}: {e}",
                target_data,
                (time.time() - start_time) * 1000,
            )
        result = parse_string(markup, correlation_id=self.correlation_id)
        return ConversionResult(
            success=True,
            converted_data=result,
            original_data=target_data,
            conversion_time_ms=(time.time() - start_time) * 1000,
            metadata={"markup_length": len(markup)},
        )

    def _create_error_result(
        self,
        error_message: str,
        original_data: Any,
        conversion_time_ms: float
    ) -> ConversionResult:
        self._logger.warning(error_message)
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=conversion_time_ms,
            errors=[error_message],
            diagnostics=[
                DiagnosticEntry(
                    severity=DiagnosticSeverity.ERROR,
                    message=error_message,
                    component=self.__class__.__name__,
                    correlation_id=self.correlation_id,
                )
            ],
        )


class LxmlAdapter(IntegrationAdapter):
    """Conversion to and from ``lxml.etree`` elements."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            target_library="lxml",
            description="Convert between Node trees and lxml.etree elements",
        )

    def is_available(self) -> bool:
        try:
            import lxml.etree  # noqa: F401
        except ImportError:
            return False
        return True

    def _convert_to(self, node: Node) -> Any:
        from lxml import etree

        return _to_etree(_conversion_root(node), etree)

    def _serialize_target(self, target_data: Any) -> str:
        from lxml import etree

        return _serialize_etree(
            target_data,
            lambda element: etree.tostring(element, encoding="unicode", method="html"),
        )


class BeautifulSoupAdapter(IntegrationAdapter):
    """Conversion to and from ``bs4.BeautifulSoup`` documents."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="beautifulsoup",
            target_library="beautifulsoup4",
            description="Convert between Node trees and BeautifulSoup documents",
        )

    def is_available(self) -> bool:
        try:
            import bs4  # noqa: F401
        except ImportError:
            return False
        return True

    def _convert_to(self, node: Node) -> Any:
        from bs4 import BeautifulSoup

        if node.node_type is NodeType.DOCUMENT:
            markup = node.inner_html() or ""
        else:
            markup = node.outer_html() or ""
        return BeautifulSoup(markup, "html.parser")

    def _serialize_target(self, target_data: Any) -> str:
        from bs4.element import Tag

        if not isinstance(target_data, Tag):
            raise TypeError("Target data is not a BeautifulSoup object")
        return str(target_data)


class ElementTreeAdapter(IntegrationAdapter):
    """Conversion to and from ``xml.etree.ElementTree`` elements."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="elementtree",
            target_library="xml.etree.ElementTree",
            description="Convert between Node trees and ElementTree elements",
        )

    def is_available(self) -> bool:
        return True

    def _convert_to(self, node: Node) -> Any:
        import xml.etree.ElementTree as ET

        return _to_etree(_conversion_root(node), ET)

    def _serialize_target(self, target_data: Any) -> str:
        import xml.etree.ElementTree as ET

        return _serialize_etree(
            target_data,
            lambda element: ET.tostring(element, encoding="unicode", method="html"),
        )


class AdapterRegistry:
    """Registry of adapter classes by name."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}
        self._lock = threading.RLock()

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        with self._lock:
            self._adapters[adapter_class().metadata.name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        correlation_id: Optional[str] = None
    ) -> Optional[IntegrationAdapter]:
        """Get an adapter instance, or None if unknown or its library is missing."""
        with self._lock:
            adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        instance = adapter_class(correlation_id)
        return instance if instance.is_available() else None

    def list_available_adapters(self) -> List[AdapterMetadata]:
        with self._lock:
            classes = list(self._adapters.values())
        available = []
        for adapter_class in classes:
            instance = adapter_class()
            if instance.is_available():
                available.append(instance.metadata)
        return available


_adapter_registry = AdapterRegistry()
for _adapter_class in (LxmlAdapter, BeautifulSoupAdapter, ElementTreeAdapter):
    _adapter_registry.register(_adapter_class)


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str,
    correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance by name."""
    return _adapter_registry.get_adapter(adapter_name, correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """List metadata of every registered adapter whose library is importable."""
    return _adapter_registry.list_available_adapters()
