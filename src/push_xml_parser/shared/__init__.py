"""Shared utilities for push-style XML parsing.

Configuration objects, the exception taxonomy, diagnostic types and logging
helpers used across all layers.
"""

from .attributes import AttributeList
from .config import (
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    ParserConfig,
    StreamConfig,
)
from .errors import (
    LexicalError,
    ProcessingInstructionError,
    StructuralError,
    XMLParseError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
)

__all__ = [
    "AttributeList",
    "ConfigError",
    "ConfigValidationError",
    "CorrelationLogger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "GlobalConfig",
    "LexicalError",
    "ParserConfig",
    "ProcessingInstructionError",
    "StreamConfig",
    "StructuralError",
    "XMLParseError",
    "get_logger",
]
