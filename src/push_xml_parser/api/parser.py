"""Push-style XML parser driver and convenience entry points.

:class:`XMLParser` pulls tokens from the tokenizer, checks well-formedness
(tag nesting, a single root element, no text outside the root) and pushes
events to the registered handlers. Malformed input never raises: it is
reported through the error handlers. Only exceptions coming from the input
stream or from a handler leave :meth:`XMLParser.parse`, and only after
``end_document`` has been delivered.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Union

from push_xml_parser.character.stream import CharacterStream, InputType, open_stream
from push_xml_parser.shared.config import ParserConfig
from push_xml_parser.shared.errors import (
    LexicalError,
    ProcessingInstructionError,
    StructuralError,
    XMLParseError,
)
from push_xml_parser.shared.logging import CorrelationLogger, get_logger
from push_xml_parser.shared.result import DiagnosticSeverity
from push_xml_parser.tokenization import (
    CHARACTER_KINDS,
    TRANSPARENT_KINDS,
    Token,
    TokenKind,
    XMLTokenizer,
    parse_element,
    parse_element_end,
    parse_processing_instruction,
)

from .handlers import DocumentHandler, ErrorHandler
from .registry import HandlerRegistry

if TYPE_CHECKING:
    from push_xml_parser.tree.builder import ParseResult


class ParserState(Enum):
    """Phases of a single parse run."""

    BEFORE_ROOT = auto()   # No start tag seen yet
    IN_DOCUMENT = auto()   # Inside the root element
    DONE = auto()          # Loop exited


@dataclass
class _DocumentState:
    """Per-parse state; discarded when the parse ends."""

    tags: List[str] = field(default_factory=list)
    buffer: List[str] = field(default_factory=list)
    root_seen: bool = False
    fatal: Optional[XMLParseError] = None
    finished: bool = False

    @property
    def phase(self) -> ParserState:
        if self.finished:
            return ParserState.DONE
        if self.root_seen:
            return ParserState.IN_DOCUMENT
        return ParserState.BEFORE_ROOT

    @property
    def root_closed(self) -> bool:
        return self.root_seen and not self.tags


class XMLParser:
    """Event-driven, well-formedness checking XML parser.

    Example:
        >>> recorder = EventRecorder()
        >>> parser = XMLParser()
        >>> parser.add_document_handler(recorder)
        >>> parser.parse('<greeting lang="en">hello</greeting>')
        >>> recorder.names()
        ['start_document', 'start_element', 'characters', 'end_element', 'end_document']

    A parser holds no state between parses and may be reused, but must not
    run two parses at once.
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()
        self.handlers = HandlerRegistry()
        self.logger = get_logger(__name__, None, "parser")

    def add_document_handler(self, handler: DocumentHandler) -> None:
        self.handlers.add_document_handler(handler)

    def add_error_handler(self, handler: ErrorHandler) -> None:
        self.handlers.add_error_handler(handler)

    def clear(self) -> None:
        """Unregister all document and error handlers."""
        self.handlers.clear()

    def swap(self, other: "XMLParser") -> None:
        """Exchange registered handlers with another parser."""
        self.handlers.swap(other.handlers)

    def _correlation_id(self) -> Optional[str]:
        settings = self.config.global_
        if settings.correlation_id:
            return settings.correlation_id
        if settings.enable_correlation_tracking:
            return uuid.uuid4().hex[:12]
        return None

    def parse(self, source: InputType) -> None:
        """Parse one document and dispatch its events.

        Args:
            source: Markup string, bytes, :class:`pathlib.Path`, file object
                or :class:`CharacterStream`

        Raises:
            TypeError: If ``source`` is of an unsupported type
            Exception: Whatever the stream or a handler raised; by then
                ``end_document`` has been delivered to every document handler
        """
        stream = open_stream(source, self.config)
        try:
            self._parse_stream(stream)
        finally:
            if stream is not source:
                stream.close()

    def _parse_stream(self, stream: CharacterStream) -> None:
        logger = self.logger.bind(self._correlation_id())
        tokenizer = XMLTokenizer(stream, logger.correlation_id)
        logger.debug("Starting parse", extra={"source": stream.name})

        try:
            self.handlers.dispatch_document("start_document")
            state = self._run(tokenizer, logger)
            if state.tags or state.fatal:
                if state.fatal is None:
                    logger.debug(
                        "Input ended inside an element",
                        extra={"line": tokenizer.line, "open_tags": list(state.tags)}
                    )
                self.handlers.dispatch_error("fatal_error", tokenizer.line)
            logger.debug(
                "Parse finished",
                extra={
                    "source": stream.name,
                    "well_formed": not (state.tags or state.fatal),
                    "tokens": tokenizer.token_count,
                    "lines": tokenizer.line,
                }
            )
        except Exception:
            logger.debug(
                "Parse aborted by exception",
                extra={"source": stream.name, "line": tokenizer.line}
            )
            raise
        finally:
            self.handlers.dispatch_document("end_document")

    def _run(self, tokenizer: XMLTokenizer, logger: CorrelationLogger) -> _DocumentState:
        state = _DocumentState()
        tokenizer.skip_whitespace()
        token = tokenizer.next_token()

        while token.kind is not TokenKind.EOF:
            self._process(token, state, logger)

            if state.fatal or state.root_closed:
                break

            token = tokenizer.next_token()
            if token.kind not in TRANSPARENT_KINDS and state.buffer:
                self.handlers.dispatch_document("characters", "".join(state.buffer))
                state.buffer.clear()

        state.finished = True
        return state

    def _fail(
        self,
        state: _DocumentState,
        error: XMLParseError,
        line: int,
        logger: CorrelationLogger
    ) -> None:
        if error.line is None:
            error.line = line
        state.fatal = error
        logger.debug(
            "Document is not well-formed",
            extra={
                "line": error.line,
                "reason": error.message,
                "error_type": type(error).__name__,
                "phase": state.phase.name,
            }
        )

    def _process(
        self,
        token: Token,
        state: _DocumentState,
        logger: CorrelationLogger
    ) -> None:
        kind = token.kind

        if kind in (TokenKind.ELEMENT_START, TokenKind.EMPTY_ELEMENT):
            state.root_seen = True
            try:
                name, attrs = parse_element(token.text)
            except StructuralError as e:
                self._fail(state, e, token.line, logger)
                return
            for handler in self.handlers.document_handlers:
                handler.start_element(token.line, name, attrs)
                if kind is TokenKind.EMPTY_ELEMENT:
                    handler.end_element(token.line, name)
            if kind is TokenKind.ELEMENT_START:
                state.tags.append(name)

        elif kind is TokenKind.ELEMENT_END:
            try:
                name = parse_element_end(token.text)
            except StructuralError as e:
                self._fail(state, e, token.line, logger)
                return
            if not state.tags:
                self._fail(state, StructuralError(f"unexpected end tag </{name}>"), token.line, logger)
            elif state.tags[-1] != name:
                self._fail(
                    state,
                    StructuralError(f"end tag </{name}> does not match <{state.tags[-1]}>"),
                    token.line,
                    logger,
                )
            else:
                self.handlers.dispatch_document("end_element", token.line, name)
                state.tags.pop()

        elif kind is TokenKind.PROCESSING_INSTRUCTION:
            try:
                target, data = parse_processing_instruction(token.text)
            except ProcessingInstructionError as e:
                logger.debug(
                    "Malformed processing instruction",
                    extra={"line": token.line, "reason": e.message}
                )
                self.handlers.dispatch_error("error", token.line)
                return
            self.handlers.dispatch_document("processing_instruction", token.line, target, data)

        elif kind in CHARACTER_KINDS:
            if state.tags:
                state.buffer.append(token.text)
            elif not token.is_whitespace:
                self._fail(
                    state,
                    StructuralError("character data outside the root element"),
                    token.line,
                    logger,
                )

        elif kind is TokenKind.ERROR:
            self._fail(state, LexicalError(token.reason or "malformed token"), token.line, logger)

        # COMMENT and DTD tokens produce no events


def parse(
    source: InputType,
    document_handlers: Iterable[DocumentHandler] = (),
    error_handlers: Iterable[ErrorHandler] = (),
    config: Optional[ParserConfig] = None
) -> None:
    """Parse ``source`` once with the given handlers.

    Examples:
        >>> recorder = EventRecorder()
        >>> parse("<a>x</a>", [recorder], [recorder])
        >>> recorder.count("fatal_error")
        0
    """
    parser = XMLParser(config)
    for handler in document_handlers:
        parser.add_document_handler(handler)
    for handler in error_handlers:
        parser.add_error_handler(handler)
    parser.parse(source)


def _build_result(source: InputType, config: Optional[ParserConfig]) -> "ParseResult":
    # Import here to avoid circular dependency
    from push_xml_parser.tree.builder import ParseResult, TreeBuilder

    from .handlers import DiagnosticCollector

    builder = TreeBuilder()
    collector = DiagnosticCollector()
    parse(source, [builder], [collector], config)
    return ParseResult(document=builder.document, diagnostics=collector.diagnostics)


def parse_string(xml_string: str, config: Optional[ParserConfig] = None) -> "ParseResult":
    """Parse markup held in a string into a document tree.

    Examples:
        >>> result = parse_string('<root><item id="1">Hello</item></root>')
        >>> result.success
        True
        >>> result.document.find('item').get_attribute('id')
        '1'

        Malformed XML is reported, not raised:
        >>> parse_string('<root><unclosed>content</root>').success
        False
    """
    if not isinstance(xml_string, str):
        raise TypeError(f"xml_string must be str, not {type(xml_string).__name__}")
    return _build_result(xml_string, config)


def parse_file(
    file_path: Union[str, Path],
    config: Optional[ParserConfig] = None
) -> "ParseResult":
    """Parse an XML file into a document tree.

    A file that cannot be opened yields an unsuccessful result with a
    diagnostic instead of an exception. Read and decode errors happening
    mid-parse still propagate.
    """
    from push_xml_parser.tree.builder import ParseResult

    path_obj = Path(file_path)
    logger = get_logger(__name__, config.global_.correlation_id if config else None, "parse_file")

    try:
        stream = open_stream(path_obj, config)
    except OSError as e:
        logger.warning("Cannot open file", extra={"file_path": str(path_obj), "error": str(e)})
        if isinstance(e, FileNotFoundError):
            message = f"File not found: {path_obj}"
        else:
            message = f"Cannot open file: {e.strerror or e}"
        result = ParseResult(document=None)
        result.add_diagnostic(
            DiagnosticSeverity.CRITICAL,
            message,
            "file_parser",
            details={"file_path": str(path_obj)},
        )
        return result

    with stream:
        return _build_result(stream, config)
