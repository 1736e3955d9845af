"""Document tree model and adapters for tree queries.

Key Components:
    XMLElement: Named element with ordered element, text, comment and PI children
    XMLText: Character data fragment
    parse_document: Parse markup with lxml and adapt it into an XMLElement tree
    adapt_tree: Adapt an already-parsed lxml or ElementTree tree
"""

from .adapters import (
    AdapterError,
    AdapterMetadata,
    ElementTreeAdapter,
    LxmlAdapter,
    SourceKind,
    TreeAdapter,
    adapt_tree,
    get_adapter,
    list_adapters,
    parse_document,
    register_adapter,
)
from .nodes import (
    XMLComment,
    XMLElement,
    XMLNode,
    XMLProcessingInstruction,
    XMLText,
)

__all__ = [
    "AdapterError",
    "AdapterMetadata",
    "ElementTreeAdapter",
    "LxmlAdapter",
    "SourceKind",
    "TreeAdapter",
    "adapt_tree",
    "get_adapter",
    "list_adapters",
    "parse_document",
    "register_adapter",
    "XMLComment",
    "XMLElement",
    "XMLNode",
    "XMLProcessingInstruction",
    "XMLText",
]
