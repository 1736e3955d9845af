"""Shared fixtures for tree query tests."""

import pytest

from xml_tree_query.tree import XMLElement, parse_document

ENUMERATION_XML = """<?xml version="1.0" encoding="UTF-8"?>
<EnumerationResults ServiceEndpoint="http://mindrust.blob.core.windows.net/">
  <Containers>
    <Container>
      <Name>pippo</Name>
      <Properties>
        <Last-Modified>Mon, 23 Nov 2015 21:12:35 GMT</Last-Modified>
        <Etag>"0x8D2F44ACF757699"</Etag>
        <LeaseStatus>unlocked</LeaseStatus>
        <LeaseState>available</LeaseState>
        <SomeNumber>256</SomeNumber>
      </Properties>
    </Container>
    <Container>
      <Name>pluto</Name>
      <Properties>
        <Last-Modified>Mon, 23Nov 2015 21:12:35 GMT</Last-Modified>
        <Etag>"0xAA2F44ACF757699"</Etag>
        <LeaseStatus>locked</LeaseStatus>
        <LeaseState>available</LeaseState>
      </Properties>
    </Container>
  </Containers>
  <NextMarker />
</EnumerationResults>"""


@pytest.fixture
def enumeration_xml() -> str:
    """The container enumeration document as text."""
    return ENUMERATION_XML


@pytest.fixture
def enumeration_root(enumeration_xml: str) -> XMLElement:
    """Root of the container enumeration document."""
    return parse_document(enumeration_xml)


@pytest.fixture
def containers(enumeration_root: XMLElement) -> list:
    """The two Container elements in document order."""
    holder = [
        child for child in enumeration_root.element_children
        if child.name == "Containers"
    ][0]
    return holder.element_children
