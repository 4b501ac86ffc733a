"""Tests for exceptions, diagnostic entries and correlation logging."""

import logging

import pytest

from push_xml_parser.shared.errors import (
    LexicalError,
    ProcessingInstructionError,
    StructuralError,
    XMLParseError,
)
from push_xml_parser.shared.logging import CorrelationLogger, get_logger
from push_xml_parser.shared.result import DiagnosticEntry, DiagnosticSeverity


class TestErrors:
    """Test the parse error taxonomy."""

    @pytest.mark.parametrize("cls", [LexicalError, StructuralError, ProcessingInstructionError])
    def test_hierarchy(self, cls):
        """Test that every error is an XMLParseError."""
        assert issubclass(cls, XMLParseError)

    def test_message_without_line(self):
        """Test string form when the line is unknown."""
        error = StructuralError("bad tag")

        assert str(error) == "bad tag"
        assert error.message == "bad tag"
        assert error.line is None

    def test_message_with_line(self):
        """Test string form including the line."""
        assert str(LexicalError("unterminated comment", line=4)) == "line 4: unterminated comment"


class TestDiagnosticEntry:
    """Test DiagnosticEntry validation and serialization."""

    def test_valid_entry(self):
        """Test a complete entry."""
        entry = DiagnosticEntry(
            severity=DiagnosticSeverity.CRITICAL,
            message="Document is not well-formed",
            component="parser",
            line=3,
        )

        assert entry.is_fatal is True
        assert entry.to_dict() == {
            "severity": "CRITICAL",
            "message": "Document is not well-formed",
            "component": "parser",
            "line": 3,
        }

    def test_non_fatal(self):
        """Test that only CRITICAL entries are fatal."""
        entry = DiagnosticEntry(DiagnosticSeverity.ERROR, "Malformed processing instruction", "parser")

        assert entry.is_fatal is False

    @pytest.mark.parametrize("kwargs,message", [
        ({"message": "", "component": "parser"}, "message cannot be empty"),
        ({"message": "m", "component": ""}, "component cannot be empty"),
        ({"message": "m", "component": "parser", "line": 0}, "Line number must be >= 1"),
    ])
    def test_validation(self, kwargs, message):
        """Test that invalid entries are rejected."""
        with pytest.raises(ValueError, match=message):
            DiagnosticEntry(severity=DiagnosticSeverity.INFO, **kwargs)


class TestCorrelationLogger:
    """Test structured logging helpers."""

    def test_component_defaults_to_module_name(self):
        """Test the default component name."""
        logger = get_logger("push_xml_parser.api.parser")

        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "parser"

    def test_records_carry_extra_fields(self, caplog):
        """Test that component and correlation ID are attached to records."""
        # Arrange
        logger = get_logger("push_xml_parser.test", "cid-1", "testing")

        # Act
        with caplog.at_level(logging.DEBUG, logger="push_xml_parser.test"):
            logger.debug("hello", extra={"line": 2})

        # Assert
        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "testing"
        assert record.correlation_id == "cid-1"
        assert record.line == 2

    def test_bind_keeps_component(self):
        """Test that bind only changes the correlation ID."""
        logger = get_logger("push_xml_parser.test", None, "testing")

        bound = logger.bind("cid-2")

        assert bound.component == "testing"
        assert bound.correlation_id == "cid-2"
        assert logger.correlation_id is None

    def test_is_enabled_for(self, caplog):
        """Test level checks delegate to the stdlib logger."""
        logger = get_logger("push_xml_parser.test")

        with caplog.at_level(logging.ERROR, logger="push_xml_parser.test"):
            assert logger.is_enabled_for(logging.DEBUG) is False
            assert logger.is_enabled_for(logging.ERROR) is True
