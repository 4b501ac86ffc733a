"""Diagnostic types reported while parsing documents."""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    INFO = auto()       # Informational messages
    WARNING = auto()    # Suspicious but accepted input
    ERROR = auto()      # Recoverable errors, parsing continued
    CRITICAL = auto()   # Fatal errors, the document is not well-formed


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with the line it refers to."""

    severity: DiagnosticSeverity
    message: str
    component: str
    line: Optional[int] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")
        if self.line is not None and self.line < 1:
            raise ValueError("Line number must be >= 1")

    @property
    def is_fatal(self) -> bool:
        return self.severity is DiagnosticSeverity.CRITICAL

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "line": self.line,
        }
