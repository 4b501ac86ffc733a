"""Tests for the attribute list passed to start_element."""

import pytest

from push_xml_parser.shared.attributes import AttributeList
from push_xml_parser.shared.errors import StructuralError


@pytest.fixture
def attrs():
    return AttributeList.from_pairs([("id", "7"), ("lang", "en"), ("class", "x")])


class TestMappingProtocol:
    """Test read access through the Mapping interface."""

    def test_lookup_and_length(self, attrs):
        """Test item access, membership and length."""
        assert attrs["lang"] == "en"
        assert "id" in attrs
        assert "missing" not in attrs
        assert attrs.get("missing", "d") == "d"
        assert len(attrs) == 3

    def test_iteration_order(self, attrs):
        """Test that iteration follows document order."""
        assert list(attrs) == ["id", "lang", "class"]
        assert list(attrs.entries()) == [("id", "7"), ("lang", "en"), ("class", "x")]

    def test_copy_to_dict(self, attrs):
        """Test that the list can be copied into a plain dict."""
        assert dict(attrs) == {"id": "7", "lang": "en", "class": "x"}

    def test_missing_key(self, attrs):
        """Test that unknown names raise KeyError."""
        with pytest.raises(KeyError):
            attrs["missing"]

    def test_duplicate_rejected(self):
        """Test that adding a name twice is a structural error."""
        attrs = AttributeList()
        attrs.add("a", "1")

        with pytest.raises(StructuralError, match="duplicate attribute 'a'"):
            attrs.add("a", "2")

        assert attrs["a"] == "1"

    def test_repr(self, attrs):
        """Test the debugging representation."""
        assert repr(attrs).startswith("AttributeList({'id': '7'")


class TestCursor:
    """Test the enumeration cursor."""

    def test_walk_all_entries(self, attrs):
        """Test a full reset/move_next/element walk."""
        # Arrange
        seen = []

        # Act
        attrs.reset()
        while attrs.move_next():
            seen.append(attrs.element)

        # Assert
        assert seen == list(attrs.entries())
        assert attrs.current_element_valid() is False
        assert attrs.move_next() is False

    def test_initial_state(self, attrs):
        """Test that a fresh list is positioned before the first entry."""
        assert attrs.at_start() is True
        assert attrs.current_element_valid() is False
        assert attrs.current() is None

    def test_element_off_list_raises(self, attrs):
        """Test that reading the cursor off the list raises IndexError."""
        with pytest.raises(IndexError):
            attrs.element

    def test_reset_restarts(self, attrs):
        """Test that reset makes the walk restartable."""
        attrs.move_next()
        attrs.move_next()
        assert attrs.current() == ("lang", "en")

        attrs.reset()

        assert attrs.at_start() is True
        assert attrs.move_next() is True
        assert attrs.element == ("id", "7")

    def test_empty_list(self):
        """Test the cursor on an empty list."""
        attrs = AttributeList()

        assert attrs.move_next() is False
        assert attrs.current() is None
