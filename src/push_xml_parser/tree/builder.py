"""In-memory document tree assembled from parse events.

:class:`TreeBuilder` is an ordinary document handler: register it with an
:class:`~push_xml_parser.api.parser.XMLParser` and read
:attr:`TreeBuilder.document` once the parse is over.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from push_xml_parser.api.handlers import DocumentHandler
from push_xml_parser.shared import (
    AttributeList,
    DiagnosticEntry,
    DiagnosticSeverity,
    get_logger,
)


@dataclass(eq=False)
class XMLElement:
    """A single element of the document tree.

    ``text`` holds all character data found directly inside the element,
    including data that sits between child elements.
    """

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text: str = ""
    children: List["XMLElement"] = field(default_factory=list)
    parent: Optional["XMLElement"] = None
    line: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate element values and establish parent-child relationships."""
        if not self.tag:
            raise ValueError("Element tag cannot be empty")
        if self.line is not None and self.line < 1:
            raise ValueError("Line number must be >= 1")

        for child in self.children:
            child.parent = self

    @property
    def full_text(self) -> str:
        """Character data of this element and all descendants, in document order.

        Text between child elements is kept in ``text`` without its position,
        so an element's own text comes before its children's.
        """
        return self.text + "".join(child.full_text for child in self.children)

    def add_child(self, child: "XMLElement") -> None:
        """Add a child element and establish parent relationship."""
        if not isinstance(child, XMLElement):
            raise TypeError("Child must be an XMLElement instance")

        child.parent = self
        self.children.append(child)

    def iter(self, tag: Optional[str] = None) -> Iterator["XMLElement"]:
        """Yield this element and its descendants in document order.

        Args:
            tag: Only yield elements with this tag name
        """
        if tag is None or self.tag == tag:
            yield self
        for child in self.children:
            yield from child.iter(tag)

    def find(self, tag: str) -> Optional["XMLElement"]:
        """Find the first descendant with matching tag name, in document order."""
        for child in self.children:
            found = next(child.iter(tag), None)
            if found is not None:
                return found
        return None

    def find_all(self, tag: str) -> List["XMLElement"]:
        """Find all descendants with matching tag name, in document order."""
        return [elem for child in self.children for elem in child.iter(tag)]

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    def get_depth(self) -> int:
        """Get depth of this element in the tree (root = 0)."""
        if self.parent is None:
            return 0
        return self.parent.get_depth() + 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {
            "tag": self.tag,
            "attributes": dict(self.attributes),
            "line": self.line,
        }

        if self.text:
            result["text"] = self.text

        if self.children:
            result["children"] = [child.to_dict() for child in self.children]

        return result


@dataclass
class XMLDocument:
    """Root element plus the processing instructions seen around and inside it.

    ``processing_instructions`` holds ``(line, target, data)`` tuples in
    document order.
    """

    root: Optional[XMLElement] = None
    processing_instructions: List[Tuple[int, str, str]] = field(default_factory=list)

    def iter_elements(self) -> Iterator[XMLElement]:
        """Iterate over all elements in document order."""
        if self.root is not None:
            yield from self.root.iter()

    def find(self, tag: str) -> Optional[XMLElement]:
        """Find first element with matching tag name, the root included."""
        if self.root is None:
            return None
        return next(self.root.iter(tag), None)

    def find_all(self, tag: str) -> List[XMLElement]:
        """Find all elements with matching tag name, the root included."""
        if self.root is None:
            return []
        return list(self.root.iter(tag))

    @property
    def total_elements(self) -> int:
        return sum(1 for _ in self.iter_elements())

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to dictionary representation."""
        result: Dict[str, Any] = {
            "total_elements": self.total_elements,
            "processing_instructions": [
                {"line": line, "target": target, "data": data}
                for line, target, data in self.processing_instructions
            ],
        }

        if self.root is not None:
            result["root"] = self.root.to_dict()

        return result


class TreeBuilder(DocumentHandler):
    """Document handler that builds an :class:`XMLDocument`.

    A builder may be reused: ``start_document`` starts a fresh document.
    After a failed parse the document holds whatever was built up to the
    point of failure.
    """

    def __init__(self) -> None:
        self.document = XMLDocument()
        self._stack: List[XMLElement] = []
        self.logger = get_logger(__name__, None, "tree_builder")

    def start_document(self) -> None:
        self.document = XMLDocument()
        self._stack = []

    def end_document(self) -> None:
        if self._stack:
            self.logger.debug(
                "Document ended with open elements",
                extra={"open_elements": [elem.tag for elem in self._stack]}
            )
        self._stack = []

    def start_element(self, line: int, name: str, attrs: AttributeList) -> None:
        element = XMLElement(tag=name, attributes=dict(attrs), line=line)
        if self._stack:
            self._stack[-1].add_child(element)
        else:
            self.document.root = element
        self._stack.append(element)

    def end_element(self, line: int, name: str) -> None:
        self._stack.pop()

    def characters(self, text: str) -> None:
        if self._stack:
            self._stack[-1].text += text

    def processing_instruction(self, line: int, target: str, data: str) -> None:
        self.document.processing_instructions.append((line, target, data))


@dataclass
class ParseResult:
    """Outcome of building a tree from one document.

    ``success`` is true when no fatal diagnostic was reported and a root
    element was found.
    """

    document: Optional[XMLDocument] = field(default_factory=XMLDocument)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    correlation_id: Optional[str] = None

    @property
    def success(self) -> bool:
        has_root = self.document is not None and self.document.root is not None
        return has_root and not any(diag.is_fatal for diag in self.diagnostics)

    @property
    def root(self) -> Optional[XMLElement]:
        return self.document.root if self.document is not None else None

    @property
    def error_count(self) -> int:
        """Number of ERROR and CRITICAL diagnostics."""
        return sum(
            1 for diag in self.diagnostics
            if diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
        )

    @property
    def fatal_line(self) -> Optional[int]:
        """Line of the first fatal diagnostic, if any."""
        return next((diag.line for diag in self.diagnostics if diag.is_fatal), None)

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        line: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            line=line,
            details=details,
            correlation_id=self.correlation_id,
        ))

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-serializable dictionary."""
        return {
            "success": self.success,
            "error_count": self.error_count,
            "fatal_line": self.fatal_line,
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
            "document": self.document.to_dict() if self.document is not None else None,
        }
