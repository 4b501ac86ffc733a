"""Observer interfaces for parse events, plus a few ready-made observers.

:class:`DocumentHandler` and :class:`ErrorHandler` define the two capability
sets the parser dispatches to. Their methods do nothing, so subclasses only
override the events they care about. Any object providing the same methods
can be registered; subclassing is not required.
"""

from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from push_xml_parser.shared.attributes import AttributeList
from push_xml_parser.shared.logging import get_logger
from push_xml_parser.shared.result import DiagnosticEntry, DiagnosticSeverity

DOCUMENT_EVENTS = frozenset({
    "start_document",
    "end_document",
    "start_element",
    "end_element",
    "characters",
    "processing_instruction",
})

ERROR_EVENTS = frozenset({"error", "fatal_error"})


class DocumentHandler:
    """Receives the logical content of a document, in document order."""

    def start_document(self) -> None:
        """Called once, before any other document event."""

    def end_document(self) -> None:
        """Called once, after every other event, even when parsing aborts.

        When a handler or the input stream raises, this still fires before
        the exception leaves :meth:`XMLParser.parse`.
        """

    def start_element(self, line: int, name: str, attrs: AttributeList) -> None:
        """Called for a start tag or an empty-element tag.

        ``attrs`` is only valid during this call.
        """

    def end_element(self, line: int, name: str) -> None:
        """Called for an end tag, and right after ``start_element`` for ``<x/>``."""

    def characters(self, text: str) -> None:
        """Called with all character data between two pieces of markup.

        Adjacent text and CDATA sections arrive merged in a single call.
        """

    def processing_instruction(self, line: int, target: str, data: str) -> None:
        """Called for each well-formed ``<?target data?>``."""


class ErrorHandler:
    """Receives well-formedness errors."""

    def error(self, line: int) -> None:
        """A recoverable error (malformed processing instruction)."""

    def fatal_error(self, line: int) -> None:
        """The document is not well-formed; called at most once per parse."""


class Event(NamedTuple):
    """One recorded callback."""

    name: str
    args: Tuple[Any, ...]


class EventRecorder(DocumentHandler, ErrorHandler):
    """Records every callback it receives, for inspection or replay.

    Attribute lists are copied into plain dicts since they are only valid
    during the callback.
    """

    def __init__(self) -> None:
        self.events: List[Event] = []

    def _record(self, name: str, *args: Any) -> None:
        self.events.append(Event(name, args))

    def start_document(self) -> None:
        self._record("start_document")

    def end_document(self) -> None:
        self._record("end_document")

    def start_element(self, line: int, name: str, attrs: AttributeList) -> None:
        self._record("start_element", line, name, dict(attrs))

    def end_element(self, line: int, name: str) -> None:
        self._record("end_element", line, name)

    def characters(self, text: str) -> None:
        self._record("characters", text)

    def processing_instruction(self, line: int, target: str, data: str) -> None:
        self._record("processing_instruction", line, target, data)

    def error(self, line: int) -> None:
        self._record("error", line)

    def fatal_error(self, line: int) -> None:
        self._record("fatal_error", line)

    def names(self) -> List[str]:
        return [event.name for event in self.events]

    def count(self, name: str) -> int:
        return sum(1 for event in self.events if event.name == name)

    def to_dicts(self) -> List[Dict[str, Any]]:
        """Convert recorded events to JSON-serializable dictionaries."""
        return [{"event": event.name, "args": list(event.args)} for event in self.events]


class DiagnosticCollector(ErrorHandler):
    """Turns error callbacks into :class:`DiagnosticEntry` objects."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self.diagnostics: List[DiagnosticEntry] = []

    def error(self, line: int) -> None:
        self.diagnostics.append(DiagnosticEntry(
            severity=DiagnosticSeverity.ERROR,
            message="Malformed processing instruction",
            component="parser",
            line=line,
            correlation_id=self.correlation_id,
        ))

    def fatal_error(self, line: int) -> None:
        self.diagnostics.append(DiagnosticEntry(
            severity=DiagnosticSeverity.CRITICAL,
            message="Document is not well-formed",
            component="parser",
            line=line,
            correlation_id=self.correlation_id,
        ))

    @property
    def fatal(self) -> bool:
        return any(diag.is_fatal for diag in self.diagnostics)


class LoggingErrorHandler(ErrorHandler):
    """Reports errors through the package logger."""

    def __init__(self, source_name: str = "<input>", correlation_id: Optional[str] = None) -> None:
        self.source_name = source_name
        self.logger = get_logger(__name__, correlation_id, "error_handler")

    def error(self, line: int) -> None:
        self.logger.warning(
            f"{self.source_name}:{line}: malformed processing instruction",
            extra={"line": line}
        )

    def fatal_error(self, line: int) -> None:
        self.logger.error(
            f"{self.source_name}:{line}: document is not well-formed",
            extra={"line": line}
        )
