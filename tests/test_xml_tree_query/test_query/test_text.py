"""Tests for text extraction."""

from xml_tree_query.query import inner_text, traverse_single_must
from xml_tree_query.tree import (
    XMLComment,
    XMLElement,
    XMLProcessingInstruction,
    XMLText,
)


class TestInnerText:
    """Test inner_text behaviour."""

    def test_returns_first_text_fragment(self) -> None:
        """Test that only the first fragment is returned."""
        node = XMLElement("a", [XMLText("first"), XMLElement("b"), XMLText("second")])

        assert inner_text(node) == "first"

    def test_skips_leading_non_text_children(self) -> None:
        """Test that elements, comments and PIs before the text are skipped."""
        node = XMLElement("a", [
            XMLElement("b", [XMLText("nested")]),
            XMLComment("note"),
            XMLProcessingInstruction("pi", "data"),
            XMLText("own"),
        ])

        assert inner_text(node) == "own"

    def test_does_not_recurse_into_children(self) -> None:
        """Test that text of child elements is never returned."""
        node = XMLElement("a", [XMLElement.leaf("b", "nested")])

        assert inner_text(node) == ""

    def test_element_without_children_reads_as_empty(self) -> None:
        """Test the permissive empty-text policy."""
        assert inner_text(XMLElement("NextMarker")) == ""

    def test_self_closing_element_from_document(self, enumeration_root: XMLElement) -> None:
        """Test a parsed self-closing element."""
        marker = traverse_single_must(enumeration_root, ["NextMarker"])

        assert inner_text(marker) == ""

    def test_text_is_not_trimmed(self) -> None:
        """Test that surrounding whitespace is reproduced."""
        node = XMLElement.leaf("a", "  padded \n")

        assert inner_text(node) == "  padded \n"

    def test_lease_status_round_trip(self, containers: list) -> None:
        """Test that leaf text is reproduced literally."""
        first = traverse_single_must(containers[0], ["Properties", "LeaseStatus"])
        second = traverse_single_must(containers[1], ["Properties", "LeaseStatus"])

        assert inner_text(first) == "unlocked"
        assert inner_text(second) == "locked"

    def test_quoted_text_kept_verbatim(self, containers: list) -> None:
        """Test that quotes in text survive."""
        etag = traverse_single_must(containers[0], ["Properties", "Etag"])

        assert inner_text(etag) == '"0x8D2F44ACF757699"'
