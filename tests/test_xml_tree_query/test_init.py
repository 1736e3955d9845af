"""Test module for xml_tree_query package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import xml_tree_query

    # Assert
    assert xml_tree_query is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import xml_tree_query

    # Assert
    assert isinstance(xml_tree_query.__version__, str)
    assert xml_tree_query.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    import xml_tree_query

    assert xml_tree_query.__author__ == "XML Tree Query Team"


def test_package_exports_resolve() -> None:
    """Test that every name in __all__ is importable from the package."""
    # Arrange
    import xml_tree_query

    # Act
    missing = [name for name in xml_tree_query.__all__ if not hasattr(xml_tree_query, name)]

    # Assert
    assert missing == []
    assert "traverse" in xml_tree_query.__all__
    assert "TreeQuery" in xml_tree_query.__all__


def test_level_one_functions_work_end_to_end() -> None:
    """Test the simple functions on a freshly parsed document."""
    from xml_tree_query import cast_must, cast_optional, parse_document

    root = parse_document("<r><a><b>42</b></a></r>")

    assert cast_must(root, ["a", "b"], int) == 42
    assert cast_optional(root, ["a", "c"], int) is None
