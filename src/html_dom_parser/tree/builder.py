"""Tree construction from a token stream.

The builder keeps an explicit stack of open elements. Each token is attached
to the element on top of the stack (or to the document when the stack is
empty); opening tags push, closing tags pop. A closing tag pops whatever is on
top without comparing names, so ``<div><span></div>`` closes the span. Such
mismatches are reported as diagnostics but never change the tree.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from html_dom_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    SerializationConfig,
    TreeConfig,
    current_memory_usage,
    get_logger,
)
from html_dom_parser.tokenization import (
    Token,
    TokenizationResult,
    TokenType,
    resolve_tag_content,
)

from .node import Node, NodeType

_COMPONENT = "html_tree_builder"


@dataclass
class ParseResult:
    """Result of building a tree, with diagnostics and performance metrics.

    The document is always present; malformed input yields a degraded tree
    and diagnostics rather than an error.
    """

    document: Node = field(default_factory=Node.document)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    tokenization_result: Optional[TokenizationResult] = None
    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    correlation_id: Optional[str] = None

    @property
    def tree(self) -> Node:
        """Alias for the document root."""
        return self.document

    @property
    def element_count(self) -> int:
        return sum(
            1 for node in self.document.iter_descendants()
            if node.node_type is NodeType.ELEMENT
        )

    @property
    def max_depth(self) -> int:
        """Deepest nesting level below the document (top-level nodes are 1)."""
        deepest = 0
        stack = [(child, 1) for child in self.document.children]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=position,
            details=details,
            correlation_id=self.correlation_id,
        ))

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        return [diag for diag in self.diagnostics if diag.severity == severity]

    @property
    def has_warnings(self) -> bool:
        """Check if any diagnostic is WARNING or worse."""
        return any(
            diag.severity in (
                DiagnosticSeverity.WARNING,
                DiagnosticSeverity.ERROR,
                DiagnosticSeverity.CRITICAL,
            )
            for diag in self.diagnostics
        )

    def get_element_by_id(self, id_value: str) -> Optional[Node]:
        return self.document.get_element_by_id(id_value)

    def get_elements_by_class(self, class_name: str) -> List[Node]:
        return self.document.get_elements_by_class(class_name)

    def get_elements_by_tag(self, kind: Any) -> List[Node]:
        return self.document.get_elements_by_tag(kind)

    def outer_html(self, node: Node) -> Optional[str]:
        """Serialize ``node`` with the configured attribute order."""
        return node.outer_html(self.serialization.attribute_order)

    def to_html(self) -> str:
        """Serialize the whole document."""
        return self.document.inner_html(self.serialization.attribute_order) or ""

    def summary(self) -> Dict[str, Any]:
        """Get summary statistics for the parse."""
        by_severity: Dict[str, int] = {}
        for diag in self.diagnostics:
            by_severity[diag.severity.name] = by_severity.get(diag.severity.name, 0) + 1

        return {
            "element_count": self.element_count,
            "max_depth": self.max_depth,
            "diagnostics_by_severity": by_severity,
            "has_warnings": self.has_warnings,
            "processing_time_ms": self.performance.processing_time_ms,
            "memory_used_bytes": self.performance.memory_used_bytes,
            "characters_processed": self.performance.characters_processed,
            "tokens_generated": self.performance.tokens_generated,
            "nodes_created": self.performance.nodes_created,
            "correlation_id": self.correlation_id,
        }


class HTMLTreeBuilder:
    """Builds a document tree from scanner tokens.

    Total over any token sequence: excess closing tags are ignored, unknown
    tokens are dropped, and elements still open at the end stay where they
    are.
    """

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Tree configuration, defaults to TreeConfig()
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or TreeConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, _COMPONENT)

        self._open_stack: List[Node] = []
        self._document: Optional[Node] = None
        self._result: Optional[ParseResult] = None
        self._nodes_created = 0

    def build(self, tokens: Union[TokenizationResult, Sequence[Token]]) -> ParseResult:
        """Build a document tree from a token stream.

        Args:
            tokens: Either a TokenizationResult or a sequence of tokens

        Returns:
            ParseResult holding the document root
        """
        start_time = time.time()
        memory_before = current_memory_usage() if self.config.measure_memory else 0

        if isinstance(tokens, TokenizationResult):
            tokenization_result: Optional[TokenizationResult] = tokens
            token_list: Sequence[Token] = tokens.tokens
        else:
            tokenization_result = None
            token_list = tokens

        self.logger.debug(
            "Starting tree building",
            extra={"token_count": len(token_list)}
        )

        result = ParseResult(
            tokenization_result=tokenization_result,
            correlation_id=self.correlation_id,
        )
        if tokenization_result is not None:
            result.diagnostics.extend(tokenization_result.diagnostics)

        self._open_stack = []
        self._document = result.document
        self._result = result
        self._nodes_created = 0

        try:
            for token in token_list:
                self._process_token(token)
            self._report_unclosed()
        finally:
            self._open_stack = []
            self._document = None
            self._result = None

        performance = result.performance
        performance.processing_time_ms = (time.time() - start_time) * 1000
        performance.tokens_generated = len(token_list)
        performance.nodes_created = self._nodes_created
        if tokenization_result is not None:
            performance.characters_processed = tokenization_result.character_count
        if self.config.measure_memory:
            performance.memory_used_bytes = max(0, current_memory_usage() - memory_before)

        self.logger.debug(
            "Tree building completed",
            extra={
                "nodes_created": self._nodes_created,
                "diagnostic_count": len(result.diagnostics),
                "processing_time_ms": performance.processing_time_ms,
            }
        )
        return result

    @property
    def _insertion_parent(self) -> Node:
        if self._open_stack:
            return self._open_stack[-1]
        assert self._document is not None
        return self._document

    def _process_token(self, token: Token) -> None:
        if token.type is TokenType.OPENING_TAG:
            node = self._append_element(token)
            if not node.is_void:
                self._open_stack.append(node)
        elif token.type is TokenType.VOID_TAG:
            self._append_element(token)
        elif token.type is TokenType.CLOSING_TAG:
            self._close_element(token)
        elif token.type is TokenType.TEXT:
            parent = self._insertion_parent
            self._attach(parent, Node.create_text(token.value, parent))
        elif token.type is TokenType.COMMENT:
            parent = self._insertion_parent
            self._attach(parent, Node.create_comment(
                token.value, parent, dict(token.attributes)
            ))
        else:
            self._diagnose(
                DiagnosticSeverity.INFO,
                "Unknown token dropped",
                token,
                {"raw": token.value},
            )

    def _append_element(self, token: Token) -> Node:
        element = token.element
        if element is None:
            element = resolve_tag_content(token.value, with_attributes=False)[0]
        parent = self._insertion_parent
        node = Node.create_element(
            element,
            parent,
            dict(token.attributes),
            token.boolean_attributes,
        )
        self._attach(parent, node)
        return node

    def _attach(self, parent: Node, node: Node) -> None:
        parent.append_child(node)
        self._nodes_created += 1

    def _close_element(self, token: Token) -> None:
        if not self._open_stack:
            self._diagnose(
                DiagnosticSeverity.INFO,
                "Closing tag with no open element ignored",
                token,
                {"tag": token.tag_name},
            )
            return

        closed = self._open_stack.pop()
        closing_name = (token.tag_name or "").lower()
        open_name = (closed.tag_name or "").lower()
        if closing_name != open_name:
            self._diagnose(
                DiagnosticSeverity.WARNING,
                f"Closing tag </{token.tag_name}> closed <{closed.tag_name}>",
                token,
                {"closing_tag": token.tag_name, "closed_element": closed.tag_name},
            )

    def _report_unclosed(self) -> None:
        if self._open_stack:
            names = [node.tag_name for node in self._open_stack]
            self._diagnose(
                DiagnosticSeverity.INFO,
                f"{len(names)} element(s) left open at end of input",
                None,
                {"open_elements": names},
            )

    def _diagnose(
        self,
        severity: DiagnosticSeverity,
        message: str,
        token: Optional[Token],
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        if not self.config.record_diagnostics or self._result is None:
            return
        self._result.add_diagnostic(
            severity,
            message,
            _COMPONENT,
            position=token.position if token is not None else None,
            details=details,
        )


def build(tokens: Union[TokenizationResult, Sequence[Token]]) -> Node:
    """Build a tree and return its document root.

    Example:
        >>> from html_dom_parser.tokenization import scan
        >>> document = build(scan("<p id='x'>Hi</p>"))
        >>> document.get_element_by_id("x").outer_html()
        '<p id="x">Hi</p>'
    """
    return HTMLTreeBuilder().build(tokens).document
