"""Markup scanner built on a single-pass character state machine.

The scanner walks the input once, looking at most one character ahead, and
produces classified tokens: opening, closing and void tags, comments and text.
It never fails. Unknown tag names resolve to UnknownElement, malformed
attribute text is parsed on a best-effort basis, and script/style bodies are
skipped without producing tokens.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Set, Tuple

from html_dom_parser.elements import AnyElementKind, from_tag_name
from html_dom_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ScannerConfig,
    get_logger,
)

_COMPONENT = "html_tokenizer"


class TokenType(Enum):
    """Token classes produced by the scanner."""

    OPENING_TAG = auto()    # <div ...>
    CLOSING_TAG = auto()    # </div>
    VOID_TAG = auto()       # Opening tag of a void element: <br>, <img ...>
    COMMENT = auto()        # <!-- ... -->, <!DOCTYPE ...>
    TEXT = auto()           # Character content between tags
    UNKNOWN = auto()        # Unterminated tag at end of input


class ScannerState(Enum):
    """Top-level states of the scanner."""

    DETERMINING_TOKEN_TYPE = auto()
    CAPTURING_TAG = auto()
    CAPTURING_TEXT = auto()
    CAPTURING_RAW_TEXT = auto()     # Inside a script or style body


class AttributeState(Enum):
    """States of the attribute sub-machine."""

    CAPTURING_KEY = auto()
    CAPTURING_WRAPPER = auto()      # After '=', waiting for a quote or value
    CAPTURING_VALUE = auto()
    WHITESPACE = auto()             # Between attributes


@dataclass(frozen=True)
class Token:
    """A single classified unit of markup.

    ``value`` is the raw source text of the token. ``attributes`` is read-only;
    ``boolean_attributes`` lists the keys that were written without ``=``.
    """

    type: TokenType
    value: str
    element: Optional[AnyElementKind] = None
    attributes: Mapping[str, str] = field(default_factory=dict)
    boolean_attributes: FrozenSet[str] = frozenset()
    position: int = 0

    def __post_init__(self) -> None:
        """Freeze attribute containers and validate."""
        if self.position < 0:
            raise ValueError("Position must be >= 0")
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(
            self, "boolean_attributes", frozenset(self.boolean_attributes)
        )
        if not self.boolean_attributes <= set(self.attributes):
            raise ValueError("Boolean attributes must also appear in attributes")

    def __hash__(self) -> int:
        return hash((
            self.type,
            self.value,
            self.element,
            tuple(sorted(self.attributes.items())),
            self.boolean_attributes,
            self.position,
        ))

    @property
    def is_tag(self) -> bool:
        """Check if this token is an opening, closing or void tag."""
        return self.type in (
            TokenType.OPENING_TAG,
            TokenType.CLOSING_TAG,
            TokenType.VOID_TAG,
        )

    @property
    def tag_name(self) -> Optional[str]:
        """Tag name of the resolved element, if any."""
        if self.element is None:
            return None
        return self.element.tag_name


@dataclass
class TokenizationResult:
    """Result of a scan with timing and diagnostics."""

    tokens: List[Token]
    character_count: int = 0
    processing_time_ms: float = 0.0
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    correlation_id: Optional[str] = None

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def token_type_distribution(self) -> Dict[str, int]:
        """Count tokens by type name."""
        distribution: Dict[str, int] = {}
        for token in self.tokens:
            distribution[token.type.name] = distribution.get(token.type.name, 0) + 1
        return distribution

    @property
    def has_warnings(self) -> bool:
        return any(
            diag.severity is not DiagnosticSeverity.DEBUG
            and diag.severity is not DiagnosticSeverity.INFO
            for diag in self.diagnostics
        )


def parse_attributes(text: str) -> Tuple[Dict[str, str], FrozenSet[str]]:
    """Parse the attribute part of a tag.

    Args:
        text: Everything after the tag name, e.g. ``class="a b" required``

    Returns:
        Tuple of the attribute mapping and the set of keys written without a
        value. Boolean attributes map to the empty string.

    Quote balance is not validated. Malformed text yields partial or merged
    attributes instead of an error.
    """
    attributes: Dict[str, str] = {}
    boolean_keys: Set[str] = set()
    key: List[str] = []
    value: List[str] = []
    wrapper: Optional[str] = None
    state = AttributeState.CAPTURING_KEY

    def record(is_boolean: bool) -> None:
        name = "".join(key)
        if name:
            attributes[name] = "" if is_boolean else "".join(value)
            if is_boolean:
                boolean_keys.add(name)
            else:
                boolean_keys.discard(name)
        key.clear()
        value.clear()

    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        index += 1

        if state is AttributeState.CAPTURING_KEY:
            if char == "=":
                state = AttributeState.CAPTURING_WRAPPER
            elif char.isspace():
                while index < length and text[index].isspace():
                    index += 1
                if index < length and text[index] == "=":
                    index += 1
                    state = AttributeState.CAPTURING_WRAPPER
                else:
                    record(is_boolean=True)
                    state = AttributeState.WHITESPACE
            else:
                key.append(char)

        elif state is AttributeState.CAPTURING_WRAPPER:
            if char.isspace():
                continue
            if char in ("'", '"'):
                wrapper = char
            else:
                wrapper = None
                value.append(char)
            state = AttributeState.CAPTURING_VALUE

        elif state is AttributeState.CAPTURING_VALUE:
            if wrapper is not None:
                if char == wrapper:
                    record(is_boolean=False)
                    state = AttributeState.WHITESPACE
                else:
                    value.append(char)
            elif char.isspace():
                record(is_boolean=False)
                state = AttributeState.WHITESPACE
            else:
                value.append(char)

        elif not char.isspace():
            key.append(char)
            state = AttributeState.CAPTURING_KEY

    if key:
        record(is_boolean=not value)

    return attributes, frozenset(boolean_keys)


def resolve_tag_content(
    raw: str,
    with_attributes: bool = True
) -> Tuple[AnyElementKind, Dict[str, str], FrozenSet[str]]:
    """Split raw tag text into element kind and attributes.

    Strips ``<``/``</`` and ``>``/``/>``, splits on the first whitespace run
    and resolves the tag name through the element catalog.
    """
    content = raw[1:-1] if raw.endswith(">") else raw[1:]
    content = content.strip()
    if content.endswith("/"):
        content = content[:-1]
    if content.startswith("/"):
        content = content[1:]

    parts = content.split(None, 1)
    element = from_tag_name(parts[0] if parts else "")
    if with_attributes and len(parts) > 1:
        attributes, boolean_keys = parse_attributes(parts[1])
        return element, attributes, boolean_keys
    return element, {}, frozenset()


class HTMLTokenizer:
    """Scanner that turns markup text into a token sequence.

    One instance may be reused; all per-scan state is reset at the start of
    every ``tokenize`` call and nothing is shared between instances.
    """

    def __init__(
        self,
        config: Optional[ScannerConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the tokenizer.

        Args:
            config: Scanner configuration, defaults to ScannerConfig()
            correlation_id: Optional correlation ID for tracking requests
        """
        self.config = config or ScannerConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, _COMPONENT)
        self._raw_openers = tuple("<" + name for name in self.config.raw_text_elements)
        self._raw_closers = tuple("</" + name for name in self.config.raw_text_elements)
        self._reset_state()

    def _reset_state(self) -> None:
        self.state = ScannerState.DETERMINING_TOKEN_TYPE
        self.tokens: List[Token] = []
        self.diagnostics: List[DiagnosticEntry] = []
        self._buffer: List[str] = []
        self._token_type = TokenType.UNKNOWN
        self._token_start = 0
        self._offset = 0

    def tokenize(self, markup: str) -> TokenizationResult:
        """Scan markup into tokens.

        Args:
            markup: Complete markup text

        Returns:
            TokenizationResult with the tokens in source order
        """
        if not isinstance(markup, str):
            raise TypeError(f"Markup must be a string, not {type(markup).__name__}")

        start_time = time.time()
        self._reset_state()
        self.logger.debug("Starting tokenization", extra={"char_count": len(markup)})

        length = len(markup)
        for index, char in enumerate(markup):
            self._offset = index
            next_char = markup[index + 1] if index + 1 < length else None
            self._process_character(char, next_char)
        self._finalize()

        processing_time_ms = (time.time() - start_time) * 1000
        result = TokenizationResult(
            tokens=self.tokens,
            character_count=length,
            processing_time_ms=processing_time_ms,
            diagnostics=self.diagnostics,
            correlation_id=self.correlation_id,
        )

        self.logger.debug(
            "Tokenization completed",
            extra={
                "token_count": result.token_count,
                "diagnostic_count": len(result.diagnostics),
                "processing_time_ms": processing_time_ms,
            }
        )
        return result

    def _process_character(self, char: str, next_char: Optional[str]) -> None:
        if self.state is ScannerState.DETERMINING_TOKEN_TYPE:
            self._process_determining(char, next_char)
        elif self.state is ScannerState.CAPTURING_TAG:
            self._process_tag(char)
        elif self.state is ScannerState.CAPTURING_TEXT:
            self._process_text(char, next_char)
        else:
            self._process_raw_text(char)

    def _process_determining(self, char: str, next_char: Optional[str]) -> None:
        self._start_token(char)
        if char == "<":
            self._enter_tag(next_char)
        else:
            self._token_type = TokenType.TEXT
            self.state = ScannerState.CAPTURING_TEXT

    def _enter_tag(self, next_char: Optional[str]) -> None:
        """Classify the tag being opened from the character after '<'."""
        if next_char == "!":
            self._token_type = TokenType.COMMENT
        elif next_char == "/":
            self._token_type = TokenType.CLOSING_TAG
        else:
            self._token_type = TokenType.OPENING_TAG
        self.state = ScannerState.CAPTURING_TAG

    def _process_tag(self, char: str) -> None:
        self._buffer.append(char)
        if char != ">":
            return

        raw = "".join(self._buffer)
        if raw.lower().startswith(self._raw_openers):
            # Script and style bodies are skipped, the opening tag with them.
            self._buffer = []
            self.state = ScannerState.CAPTURING_RAW_TEXT
            return

        self._emit_tag(raw)
        self.state = ScannerState.DETERMINING_TOKEN_TYPE

    def _process_text(self, char: str, next_char: Optional[str]) -> None:
        if char != "<":
            self._buffer.append(char)
            return

        self._emit_text()
        self._start_token(char)
        self._enter_tag(next_char)

    def _process_raw_text(self, char: str) -> None:
        if char == ">":
            tail = "".join(self._buffer).rstrip().lower()
            if tail.endswith(self._raw_closers):
                self.diagnostics.append(self._diagnostic(
                    DiagnosticSeverity.DEBUG,
                    "Skipped raw text element body",
                    self._token_start,
                    {"skipped_characters": len(self._buffer) + 1},
                ))
                self._buffer = []
                self.state = ScannerState.DETERMINING_TOKEN_TYPE
                return
        self._buffer.append(char)

    def _start_token(self, char: str) -> None:
        self._buffer = [char]
        self._token_start = self._offset

    def _emit_tag(self, raw: str) -> None:
        token_type = self._token_type
        element, attributes, boolean_keys = resolve_tag_content(raw)
        if token_type is TokenType.OPENING_TAG and element.is_void:
            token_type = TokenType.VOID_TAG

        self.tokens.append(Token(
            type=token_type,
            value=raw,
            element=element,
            attributes=attributes,
            boolean_attributes=boolean_keys,
            position=self._token_start,
        ))

    def _emit_text(self) -> None:
        text = "".join(self._buffer)
        if not text:
            return
        if self.config.discard_whitespace_text and not text.strip():
            return
        self.tokens.append(Token(
            type=TokenType.TEXT,
            value=text,
            position=self._token_start,
        ))

    def _finalize(self) -> None:
        """Flush whatever the input ended in the middle of."""
        if self.state is ScannerState.CAPTURING_TEXT:
            self._emit_text()
        elif self.state is ScannerState.CAPTURING_TAG:
            raw = "".join(self._buffer)
            self.tokens.append(Token(
                type=TokenType.UNKNOWN,
                value=raw,
                position=self._token_start,
            ))
            self.diagnostics.append(self._diagnostic(
                DiagnosticSeverity.WARNING,
                "Unterminated tag at end of input",
                self._token_start,
                {"raw": raw},
            ))
        elif self.state is ScannerState.CAPTURING_RAW_TEXT:
            self.diagnostics.append(self._diagnostic(
                DiagnosticSeverity.WARNING,
                "Unterminated raw text element at end of input",
                self._token_start,
                {"skipped_characters": len(self._buffer)},
            ))
        self._buffer = []
        self.state = ScannerState.DETERMINING_TOKEN_TYPE

    def _diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        position: int,
        details: Optional[Dict[str, object]] = None
    ) -> DiagnosticEntry:
        return DiagnosticEntry(
            severity=severity,
            message=message,
            component=_COMPONENT,
            position=position,
            details=details,
            correlation_id=self.correlation_id,
        )


def scan(markup: str, config: Optional[ScannerConfig] = None) -> List[Token]:
    """Scan markup into an ordered list of tokens.

    Example:
        >>> [token.type.name for token in scan("<p>Hi</p>")]
        ['OPENING_TAG', 'TEXT', 'CLOSING_TAG']
    """
    return HTMLTokenizer(config).tokenize(markup).tokens
