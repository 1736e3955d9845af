"""Text extraction from elements."""

from xml_tree_query.tree.nodes import XMLElement, XMLText


def inner_text(node: XMLElement) -> str:
    """Return the content of the first text fragment directly under ``node``.

    Element, comment and processing-instruction children are skipped, never
    descended into. An element without any text fragment, such as a
    self-closing ``<NextMarker />``, reads as the empty string. The content is
    returned exactly as stored, without trimming.
    """
    for child in node.children:
        if isinstance(child, XMLText):
            return child.content
    return ""
