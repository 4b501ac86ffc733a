"""Exception taxonomy for push-style XML parsing.

These exceptions are raised and caught inside the parser. Malformed input is
never reported to callers through them; the driver converts each one into
the matching error handler callback.
"""

from typing import Optional


class XMLParseError(Exception):
    """Base class for all markup errors detected by the parser."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class LexicalError(XMLParseError):
    """Malformed or unterminated token, or an undecodable entity reference."""


class StructuralError(XMLParseError):
    """Malformed tag syntax or a violation of element nesting rules."""


class ProcessingInstructionError(XMLParseError):
    """Malformed processing instruction. The only recoverable error class."""
