"""Shared utilities for HTML DOM parsing.

This module provides configuration objects, diagnostic types and logging
helpers used by the scanner, the tree builder and the API layer.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    current_memory_usage,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
    ScannerConfig,
    SerializationConfig,
    TreeConfig,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "current_memory_usage",
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "ScannerConfig",
    "SerializationConfig",
    "TreeConfig",
    "CorrelationLogger",
    "get_logger",
]
