"""Tests for handler registration and ordered dispatch."""

from unittest.mock import Mock, call

import pytest

from push_xml_parser.api.handlers import DocumentHandler, ErrorHandler, EventRecorder
from push_xml_parser.api.registry import HandlerRegistry


class TestRegistration:
    """Test adding, clearing and swapping handlers."""

    def test_handlers_kept_in_order(self):
        """Test that handlers are stored in registration order, duplicates included."""
        registry = HandlerRegistry()
        first, second = EventRecorder(), EventRecorder()

        registry.add_document_handler(first)
        registry.add_document_handler(second)
        registry.add_document_handler(first)
        registry.add_error_handler(second)

        assert registry.document_handlers == (first, second, first)
        assert registry.error_handlers == (second,)
        assert len(registry) == 4

    def test_views_are_snapshots(self):
        """Test that the exposed handler views cannot change the registry."""
        registry = HandlerRegistry()
        registry.add_document_handler(DocumentHandler())

        view = registry.document_handlers

        assert isinstance(view, tuple)
        assert len(registry.document_handlers) == 1

    def test_duck_typed_handler(self):
        """Test that any object with the callbacks can be registered."""
        class Minimal:
            def error(self, line):
                pass

            def fatal_error(self, line):
                pass

        registry = HandlerRegistry()
        registry.add_error_handler(Minimal())

        assert len(registry.error_handlers) == 1

    def test_missing_callbacks_rejected(self):
        """Test that incomplete handlers are rejected with the missing names."""
        class OnlyError:
            def error(self, line):
                pass

        registry = HandlerRegistry()

        with pytest.raises(TypeError, match="OnlyError is not an error handler: missing fatal_error"):
            registry.add_error_handler(OnlyError())
        with pytest.raises(TypeError, match="not a document handler"):
            registry.add_document_handler(ErrorHandler())

    def test_clear(self):
        """Test that clear removes every handler."""
        registry = HandlerRegistry()
        registry.add_document_handler(DocumentHandler())
        registry.add_error_handler(ErrorHandler())

        registry.clear()

        assert len(registry) == 0

    def test_swap(self):
        """Test that swap exchanges both handler lists."""
        left, right = HandlerRegistry(), HandlerRegistry()
        doc, err = DocumentHandler(), ErrorHandler()
        left.add_document_handler(doc)
        right.add_error_handler(err)

        left.swap(right)

        assert left.document_handlers == ()
        assert left.error_handlers == (err,)
        assert right.document_handlers == (doc,)
        assert right.error_handlers == ()


class TestDispatch:
    """Test dispatch to registered handlers."""

    def test_dispatch_document_in_order(self):
        """Test that every handler receives the event in registration order."""
        # Arrange
        manager = Mock()
        first, second = Mock(spec=DocumentHandler), Mock(spec=DocumentHandler)
        manager.attach_mock(first, "first")
        manager.attach_mock(second, "second")
        registry = HandlerRegistry()
        registry.add_document_handler(first)
        registry.add_document_handler(second)

        # Act
        registry.dispatch_document("characters", "text")

        # Assert
        assert manager.mock_calls == [
            call.first.characters("text"),
            call.second.characters("text"),
        ]

    def test_dispatch_error(self):
        """Test error dispatch passes the line."""
        handler = Mock(spec=ErrorHandler)
        registry = HandlerRegistry()
        registry.add_error_handler(handler)

        registry.dispatch_error("fatal_error", 7)

        handler.fatal_error.assert_called_once_with(7)

    def test_unknown_events_rejected(self):
        """Test that only known event names can be dispatched."""
        registry = HandlerRegistry()

        with pytest.raises(ValueError, match="Unknown document event"):
            registry.dispatch_document("comment", "x")
        with pytest.raises(ValueError, match="Unknown error event"):
            registry.dispatch_error("warning", 1)
