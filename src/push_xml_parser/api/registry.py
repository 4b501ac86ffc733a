"""Ordered collections of registered document and error handlers."""

from typing import Any, List, Tuple

from .handlers import DOCUMENT_EVENTS, ERROR_EVENTS, DocumentHandler, ErrorHandler


def _check_capabilities(handler: Any, events: frozenset, kind: str) -> None:
    missing = sorted(name for name in events if not callable(getattr(handler, name, None)))
    if missing:
        raise TypeError(
            f"{type(handler).__name__} is not {kind}: missing {', '.join(missing)}"
        )


class HandlerRegistry:
    """Registration and in-order dispatch of parse observers.

    Handlers are called in registration order; every handler receives every
    event. The registry does not manage handler lifetimes.
    """

    def __init__(self) -> None:
        self._document_handlers: List[DocumentHandler] = []
        self._error_handlers: List[ErrorHandler] = []

    def add_document_handler(self, handler: DocumentHandler) -> None:
        """Append a document handler. The same handler may be added twice.

        Raises:
            TypeError: If ``handler`` lacks one of the document callbacks
        """
        _check_capabilities(handler, DOCUMENT_EVENTS, "a document handler")
        self._document_handlers.append(handler)

    def add_error_handler(self, handler: ErrorHandler) -> None:
        """Append an error handler.

        Raises:
            TypeError: If ``handler`` lacks ``error`` or ``fatal_error``
        """
        _check_capabilities(handler, ERROR_EVENTS, "an error handler")
        self._error_handlers.append(handler)

    def clear(self) -> None:
        """Unregister all handlers."""
        self._document_handlers.clear()
        self._error_handlers.clear()

    def swap(self, other: "HandlerRegistry") -> None:
        """Exchange registered handlers with another registry."""
        self._document_handlers, other._document_handlers = (
            other._document_handlers, self._document_handlers
        )
        self._error_handlers, other._error_handlers = (
            other._error_handlers, self._error_handlers
        )

    @property
    def document_handlers(self) -> Tuple[DocumentHandler, ...]:
        return tuple(self._document_handlers)

    @property
    def error_handlers(self) -> Tuple[ErrorHandler, ...]:
        return tuple(self._error_handlers)

    def dispatch_document(self, event: str, *args: Any) -> None:
        """Call ``event`` on every document handler, in registration order."""
        if event not in DOCUMENT_EVENTS:
            raise ValueError(f"Unknown document event: {event}")
        for handler in self._document_handlers:
            getattr(handler, event)(*args)

    def dispatch_error(self, event: str, line: int) -> None:
        """Call ``event`` on every error handler, in registration order."""
        if event not in ERROR_EVENTS:
            raise ValueError(f"Unknown error event: {event}")
        for handler in self._error_handlers:
            getattr(handler, event)(line)

    def __len__(self) -> int:
        return len(self._document_handlers) + len(self._error_handlers)
