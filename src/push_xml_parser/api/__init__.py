"""Public parsing interface.

Key Components:
    XMLParser: Push parser dispatching events to registered handlers
    DocumentHandler / ErrorHandler: Observer interfaces for parse events
    HandlerRegistry: Ordered handler collections used by the parser
    parse / parse_string / parse_file: One-call entry points
"""

from .handlers import (
    DOCUMENT_EVENTS,
    ERROR_EVENTS,
    DiagnosticCollector,
    DocumentHandler,
    ErrorHandler,
    Event,
    EventRecorder,
    LoggingErrorHandler,
)
from .registry import HandlerRegistry
from .parser import (
    ParserState,
    XMLParser,
    parse,
    parse_file,
    parse_string,
)

__all__ = [
    "DOCUMENT_EVENTS",
    "DiagnosticCollector",
    "DocumentHandler",
    "ERROR_EVENTS",
    "ErrorHandler",
    "Event",
    "EventRecorder",
    "HandlerRegistry",
    "LoggingErrorHandler",
    "ParserState",
    "XMLParser",
    "parse",
    "parse_file",
    "parse_string",
]
