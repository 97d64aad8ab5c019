"""Parser API: scan and build in one call.

Module-level functions cover one-off parses; HTMLParser holds a configuration
and accumulates statistics across many parses.
"""

import logging
import time
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, TextIO, Union

from html_dom_parser.shared import ParserConfig, get_logger
from html_dom_parser.tokenization import HTMLTokenizer
from html_dom_parser.tree import HTMLTreeBuilder, ParseResult

InputType = Union[str, bytes, Path, BinaryIO, TextIO]

PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000


def _decode(content: Union[str, bytes]) -> str:
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return content


def _read_input(input_data: InputType, encoding: str = "utf-8") -> str:
    """Turn any supported input into markup text."""
    if isinstance(input_data, (str, bytes)):
        return _decode(input_data)
    if isinstance(input_data, Path):
        return input_data.read_text(encoding=encoding, errors="replace")
    if hasattr(input_data, "read"):
        return _decode(input_data.read())
    raise TypeError(
        f"Unsupported input type {type(input_data).__name__}; "
        "expected str, bytes, Path or a file-like object"
    )


def _run(markup: str, config: ParserConfig, correlation_id: Optional[str]) -> ParseResult:
    tokenizer = HTMLTokenizer(config.scanner, correlation_id)
    builder = HTMLTreeBuilder(config.tree, correlation_id)
    result = builder.build(tokenizer.tokenize(markup))
    result.serialization = config.serialization
    return result


def parse(
    input_data: InputType,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse markup from a string, bytes, Path or file-like object.

    Bytes are decoded as UTF-8; undecodable sequences are replaced rather than
    rejected.

    Args:
        input_data: Markup source
        config: Optional parser configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        ParseResult containing the document root and diagnostics

    Examples:
        >>> result = parse('<div class="a b">x</div>')
        >>> len(result.get_elements_by_class("a"))
        1
    """
    config = config or ParserConfig()
    correlation_id = correlation_id or config.correlation_id
    logger = get_logger(__name__, correlation_id, "parse")

    markup = _read_input(input_data)
    if logger.is_enabled_for(logging.DEBUG):
        logger.debug(
            "Starting parse operation",
            extra={
                "input_type": type(input_data).__name__,
                "preview": markup[:PREVIEW_LENGTH],
            }
        )
    return _run(markup, config, correlation_id)


def parse_string(
    markup: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse markup held in a string."""
    if not isinstance(markup, str):
        raise TypeError(f"Markup must be a string, not {type(markup).__name__}")
    return parse(markup, config, correlation_id)


def parse_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse markup from a file.

    Args:
        file_path: Path to the file
        encoding: Text encoding of the file
        config: Optional parser configuration
        correlation_id: Optional correlation ID for request tracking

    Raises:
        OSError: If the file cannot be read
    """
    path_obj = Path(file_path)
    config = config or ParserConfig()
    correlation_id = correlation_id or config.correlation_id
    logger = get_logger(__name__, correlation_id, "parse_file")
    logger.debug(
        "Starting file parse operation",
        extra={"file_path": str(path_obj), "encoding": encoding}
    )
    return _run(_read_input(path_obj, encoding), config, correlation_id)


class HTMLParser:
    """Reusable parser holding a configuration and usage statistics.

    Examples:
        >>> parser = HTMLParser(ParserConfig().override(
        ...     serialization__attribute_order="insertion"))
        >>> result = parser.parse("<p b='1' a='2'>x</p>")
        >>> result.outer_html(result.document.children[0])
        '<p b="1" a="2">x</p>'
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize parser.

        Args:
            config: Parser configuration (defaults to ParserConfig())
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "html_parser")

        self._parse_count = 0
        self._total_processing_time = 0.0
        self._total_characters = 0
        self._total_warnings = 0

    def parse(
        self,
        input_data: InputType,
        correlation_id_override: Optional[str] = None
    ) -> ParseResult:
        """Parse markup with this parser's configuration."""
        start_time = time.time()
        effective_correlation_id = correlation_id_override or self.correlation_id

        result = parse(input_data, self.config, effective_correlation_id)
        if result.has_warnings:
            self.logger.bind(effective_correlation_id).warning(
                "Parse finished with warnings",
                extra={"diagnostic_count": len(result.diagnostics)}
            )

        self._parse_count += 1
        self._total_processing_time += (time.time() - start_time) * MS_PER_SECOND
        self._total_characters += result.performance.characters_processed
        if result.has_warnings:
            self._total_warnings += 1
        return result

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the configuration used by later parses."""
        self.config = config
        self.logger.info(
            "Parser reconfigured",
            extra={"changes": config.describe()}
        )

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "parses_with_warnings": self._total_warnings,
            "total_characters": self._total_characters,
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._total_processing_time = 0.0
        self._total_characters = 0
        self._total_warnings = 0
