"""Test module for push_xml_parser package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import push_xml_parser

    # Assert
    assert push_xml_parser is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    import push_xml_parser

    assert isinstance(push_xml_parser.__version__, str)
    assert push_xml_parser.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    import push_xml_parser

    assert push_xml_parser.__author__ == "Push XML Parser Team"


def test_package_all_exports() -> None:
    """Test that every name in __all__ is importable from the package."""
    import push_xml_parser

    for name in push_xml_parser.__all__:
        assert hasattr(push_xml_parser, name), name

    for expected in ("parse", "parse_string", "parse_file", "XMLParser", "ParseResult"):
        assert expected in push_xml_parser.__all__
