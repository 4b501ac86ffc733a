"""Tests for the tree builder and result objects."""

import pytest

from push_xml_parser.api.handlers import DiagnosticCollector
from push_xml_parser.api.parser import XMLParser, parse_string
from push_xml_parser.shared.result import DiagnosticSeverity
from push_xml_parser.tree.builder import ParseResult, TreeBuilder, XMLDocument, XMLElement

CATALOG = """<?xml version="1.0"?>
<catalog>
  <book id="b1"><title>First</title></book>
  <book id="b2">
    <title>Second</title>
    <note>see <ref to="b1"/> also</note>
  </book>
</catalog>
"""


class TestXMLElement:
    """Test XMLElement behavior."""

    def test_requires_tag(self):
        """Test that an empty tag is rejected."""
        with pytest.raises(ValueError, match="Element tag cannot be empty"):
            XMLElement(tag="")

    def test_rejects_invalid_line(self):
        """Test that the line must be 1-based."""
        with pytest.raises(ValueError, match="Line number must be >= 1"):
            XMLElement(tag="a", line=0)

    def test_children_get_parent(self):
        """Test parent links for children passed to the constructor and added later."""
        child = XMLElement(tag="b")
        parent = XMLElement(tag="a", children=[child])
        late = XMLElement(tag="c")

        parent.add_child(late)

        assert child.parent is parent
        assert late.parent is parent
        assert late.get_depth() == 1

    def test_add_child_type_checked(self):
        """Test that only elements can be added as children."""
        with pytest.raises(TypeError):
            XMLElement(tag="a").add_child("b")

    def test_get_attribute(self):
        """Test attribute lookup with default."""
        element = XMLElement(tag="a", attributes={"x": "1"})

        assert element.get_attribute("x") == "1"
        assert element.get_attribute("y") is None
        assert element.get_attribute("y", "d") == "d"


class TestTreeBuilder:
    """Test building trees from parse events."""

    @pytest.fixture
    def document(self) -> XMLDocument:
        builder = TreeBuilder()
        parser = XMLParser()
        parser.add_document_handler(builder)
        parser.parse(CATALOG)
        return builder.document

    def test_structure(self, document):
        """Test the root, children and attributes of the built tree."""
        root = document.root

        assert root.tag == "catalog"
        assert root.line == 2
        assert [child.get_attribute("id") for child in root.children] == ["b1", "b2"]
        assert root.children[1].line == 4
        assert root.children[0].parent is root

    def test_find_in_document_order(self, document):
        """Test find and find_all search depth-first in document order."""
        assert document.find("title").text == "First"
        assert [t.text for t in document.find_all("title")] == ["First", "Second"]
        assert document.find("catalog") is document.root
        assert document.root.find("catalog") is None
        assert document.find("missing") is None

    def test_iter(self, document):
        """Test iteration over all elements and filtered by tag."""
        tags = [element.tag for element in document.root.iter()]

        assert tags == ["catalog", "book", "title", "book", "title", "note", "ref"]
        assert len(list(document.root.iter("book"))) == 2
        assert document.total_elements == 7

    def test_mixed_content_text(self, document):
        """Test that text around child elements is accumulated on the parent."""
        note = document.find("note")

        assert note.text == "see  also"
        assert note.find("ref").get_attribute("to") == "b1"

    def test_full_text(self, document):
        """Test text collected from an element and its descendants."""
        book = document.find_all("book")[0]

        assert book.full_text == "First"

    def test_processing_instructions(self, document):
        """Test that processing instructions are recorded with their line."""
        assert document.processing_instructions == [(1, "xml", 'version="1.0"')]

    def test_to_dict(self, document):
        """Test the dictionary form of the document."""
        data = document.to_dict()

        assert data["total_elements"] == 7
        assert data["root"]["tag"] == "catalog"
        assert data["root"]["children"][0]["attributes"] == {"id": "b1"}
        assert data["processing_instructions"][0]["target"] == "xml"

    def test_builder_reuse_starts_fresh(self):
        """Test that each parse replaces the previous document."""
        builder = TreeBuilder()
        parser = XMLParser()
        parser.add_document_handler(builder)

        parser.parse("<first/>")
        first = builder.document
        parser.parse("<second/>")

        assert first.root.tag == "first"
        assert builder.document.root.tag == "second"

    def test_partial_tree_after_failure(self):
        """Test that a failed parse leaves the tree built so far."""
        builder = TreeBuilder()
        parser = XMLParser()
        parser.add_document_handler(builder)

        parser.parse("<a><b>text</c>")

        assert builder.document.root.tag == "a"
        assert builder.document.find("b").text == "text"

    def test_empty_document(self):
        """Test navigation on a document without root."""
        document = XMLDocument()

        assert document.find("a") is None
        assert document.find_all("a") == []
        assert list(document.iter_elements()) == []
        assert "root" not in document.to_dict()


class TestParseResult:
    """Test ParseResult summaries."""

    def test_success_requires_root(self):
        """Test that a result without root element is not successful."""
        assert ParseResult().success is False
        assert ParseResult(document=None).root is None

    def test_error_count_and_fatal_line(self):
        """Test counting of error diagnostics and the first fatal line."""
        # Arrange
        collector = DiagnosticCollector()
        collector.error(2)
        collector.fatal_error(9)
        document = XMLDocument(root=XMLElement(tag="a"))

        # Act
        result = ParseResult(document=document, diagnostics=collector.diagnostics)

        # Assert
        assert result.success is False
        assert result.error_count == 2
        assert result.fatal_line == 9
        assert len(result.get_diagnostics_by_severity(DiagnosticSeverity.ERROR)) == 1

    def test_add_diagnostic(self):
        """Test adding diagnostics carries the result's correlation ID."""
        result = ParseResult(correlation_id="cid")

        result.add_diagnostic(DiagnosticSeverity.WARNING, "odd", "test", line=3)

        assert result.diagnostics[0].correlation_id == "cid"
        assert result.diagnostics[0].line == 3
        assert result.error_count == 0
        assert result.fatal_line is None

    def test_to_dict(self):
        """Test the dictionary form of a parse result."""
        result = parse_string("<a>\n<b></a>")

        data = result.to_dict()

        assert data["success"] is False
        assert data["fatal_line"] == 2
        assert data["diagnostics"][0]["severity"] == "CRITICAL"
        assert data["document"]["root"]["tag"] == "a"
