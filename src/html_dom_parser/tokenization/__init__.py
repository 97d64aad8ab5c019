"""Tokenization engine for HTML DOM parsing.

Converts markup text into classified tokens with a single-pass state machine.

Key Components:
    HTMLTokenizer: Configurable scanner producing a TokenizationResult
    scan: Convenience function returning the token list
    Token: One classified unit of markup with its resolved element and attributes
    TokenType: Token classes (opening, closing, void, comment, text, unknown)
    parse_attributes: The attribute sub-machine, usable on its own
"""

from .tokenizer import (
    AttributeState,
    HTMLTokenizer,
    ScannerState,
    Token,
    TokenizationResult,
    TokenType,
    parse_attributes,
    resolve_tag_content,
    scan,
)

__all__ = [
    "AttributeState",
    "HTMLTokenizer",
    "ScannerState",
    "Token",
    "TokenizationResult",
    "TokenType",
    "parse_attributes",
    "resolve_tag_content",
    "scan",
]
