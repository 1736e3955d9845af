"""Adapters between third-party XML trees and the query tree model.

The query engine never lexes markup itself. Documents are parsed by lxml (or
handed over already parsed as lxml or ElementTree elements) and adapted here
into XMLElement trees whose children keep element and text fragments in
document order.
"""

import re
import threading
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, TextIO, Type, Union

from lxml import etree

from xml_tree_query.shared import DocumentConfig, get_logger
from xml_tree_query.tree.nodes import (
    XMLComment,
    XMLElement,
    XMLProcessingInstruction,
    XMLText,
)

# Type definitions for document input
DocumentInput = Union[str, bytes, Path, BinaryIO, TextIO]

_XML_DECLARATION = re.compile(r"\A\ufeff?\s*<\?xml\s.*?\?>", re.DOTALL)


class AdapterError(Exception):
    """Raised when a foreign tree or document cannot be adapted."""


class SourceKind(Enum):
    """Kinds of nodes found in a foreign tree."""

    ELEMENT = auto()
    COMMENT = auto()
    PROCESSING_INSTRUCTION = auto()
    OTHER = auto()           # Unresolved entity references and the like


@dataclass(frozen=True)
class AdapterMetadata:
    """Metadata about a tree adapter."""

    name: str
    target_library: str
    description: str


class TreeAdapter(ABC):
    """Abstract base class for adapters producing XMLElement trees.

    Subclasses only classify foreign nodes; the walk that copies names,
    attributes, text and tails in document order is shared.
    """

    def __init__(
        self,
        config: Optional[DocumentConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the tree adapter.

        Args:
            config: Document configuration controlling which nodes are kept
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or DocumentConfig()
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def accepts(self, source: Any) -> bool:
        """Check whether ``source`` is a tree this adapter understands."""

    @abstractmethod
    def classify(self, node: Any) -> SourceKind:
        """Classify a foreign node."""

    def processing_instruction(self, node: Any) -> XMLProcessingInstruction:
        """Build a processing instruction child from a foreign node."""
        return XMLProcessingInstruction(str(node.target), node.text or "")

    def root_of(self, source: Any) -> Any:
        """Return the root element of ``source``."""
        if hasattr(source, "getroot"):
            return source.getroot()
        return source

    def to_tree(self, source: Any) -> XMLElement:
        """Convert a foreign element (or element tree) into an XMLElement.

        Args:
            source: Foreign element or element tree

        Returns:
            Root XMLElement of the adapted tree

        Raises:
            AdapterError: If ``source`` is not accepted or is not an element
        """
        if not self.accepts(source):
            raise AdapterError(
                f"{self.metadata.name} adapter cannot convert {type(source).__name__}"
            )

        root = self.root_of(source)
        if root is None or self.classify(root) is not SourceKind.ELEMENT:
            raise AdapterError("Tree root must be an element")

        tree = self._convert(root)
        self._logger.debug(
            "Adapted foreign tree",
            extra={"adapter": self.metadata.name, "root": tree.name},
        )
        return tree

    def _convert(self, node: Any) -> XMLElement:
        element = XMLElement(
            str(node.tag),
            attributes={str(key): str(value) for key, value in node.attrib.items()},
        )
        self._append_text(element, node.text)

        for child in node:
            kind = self.classify(child)
            if kind is SourceKind.ELEMENT:
                element.children.append(self._convert(child))
            elif kind is SourceKind.COMMENT and self.config.keep_comments:
                element.children.append(XMLComment(child.text or ""))
            elif (
                kind is SourceKind.PROCESSING_INSTRUCTION
                and self.config.keep_processing_instructions
            ):
                element.children.append(self.processing_instruction(child))
            self._append_text(element, child.tail)

        return element

    def _append_text(self, element: XMLElement, text: Optional[str]) -> None:
        # Fragments separated only by a skipped node are merged.
        if text is None:
            return
        if self.config.drop_whitespace_text and not text.strip():
            return
        if element.children and isinstance(element.children[-1], XMLText):
            previous = element.children.pop()
            text = previous.content + text
        element.children.append(XMLText(text))


class LxmlAdapter(TreeAdapter):
    """Adapter for trees produced by lxml.etree."""

    @property
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""
        return AdapterMetadata(
            name="lxml",
            target_library="lxml",
            description="Conversion from lxml.etree elements to XMLElement trees",
        )

    def accepts(self, source: Any) -> bool:
        """Check whether ``source`` is an lxml element or element tree."""
        return isinstance(source, (etree._Element, etree._ElementTree))

    def classify(self, node: Any) -> SourceKind:
        """Classify an lxml node."""
        if isinstance(node, etree._Comment):
            return SourceKind.COMMENT
        if isinstance(node, etree._ProcessingInstruction):
            return SourceKind.PROCESSING_INSTRUCTION
        if isinstance(node, etree._Entity):
            return SourceKind.OTHER
        return SourceKind.ELEMENT


class ElementTreeAdapter(TreeAdapter):
    """Adapter for trees produced by xml.etree.ElementTree."""

    @property
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""
        return AdapterMetadata(
            name="elementtree",
            target_library="xml.etree.ElementTree",
            description="Conversion from ElementTree elements to XMLElement trees",
        )

    def accepts(self, source: Any) -> bool:
        """Check whether ``source`` is an ElementTree element or tree."""
        return isinstance(source, (ET.Element, ET.ElementTree))

    def classify(self, node: Any) -> SourceKind:
        """Classify an ElementTree node."""
        if node.tag is ET.Comment:
            return SourceKind.COMMENT
        if node.tag is ET.ProcessingInstruction:
            return SourceKind.PROCESSING_INSTRUCTION
        if not isinstance(node.tag, str):
            return SourceKind.OTHER
        return SourceKind.ELEMENT

    def processing_instruction(self, node: Any) -> XMLProcessingInstruction:
        """Split ElementTree's combined ``target content`` PI text."""
        target, _, content = (node.text or "").partition(" ")
        return XMLProcessingInstruction(target, content)


class AdapterRegistry:
    """Registry for managing tree adapters."""

    def __init__(self) -> None:
        """Initialize the adapter registry."""
        self._adapters: Dict[str, Type[TreeAdapter]] = {}
        self._lock = threading.RLock()

    def register(self, adapter_class: Type[TreeAdapter]) -> None:
        """Register an adapter class under its metadata name."""
        with self._lock:
            self._adapters[adapter_class().metadata.name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        config: Optional[DocumentConfig] = None,
        correlation_id: Optional[str] = None
    ) -> Optional[TreeAdapter]:
        """Get an adapter instance by name, or None if unknown."""
        with self._lock:
            adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        return adapter_class(config, correlation_id)

    def adapter_for(
        self,
        source: Any,
        config: Optional[DocumentConfig] = None,
        correlation_id: Optional[str] = None
    ) -> Optional[TreeAdapter]:
        """Find the first registered adapter accepting ``source``."""
        with self._lock:
            adapter_classes = list(self._adapters.values())
        for adapter_class in adapter_classes:
            adapter = adapter_class(config, correlation_id)
            if adapter.accepts(source):
                return adapter
        return None

    def names(self) -> List[str]:
        """Names of registered adapters in registration order."""
        with self._lock:
            return list(self._adapters)


# Global adapter registry instance
_adapter_registry = AdapterRegistry()
_adapter_registry.register(LxmlAdapter)
_adapter_registry.register(ElementTreeAdapter)


def register_adapter(adapter_class: Type[TreeAdapter]) -> None:
    """Register a tree adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str,
    config: Optional[DocumentConfig] = None,
    correlation_id: Optional[str] = None
) -> Optional[TreeAdapter]:
    """Get a registered adapter instance by name."""
    return _adapter_registry.get_adapter(adapter_name, config, correlation_id)


def list_adapters() -> List[str]:
    """List names of all registered adapters."""
    return _adapter_registry.names()


def adapt_tree(
    source: Any,
    config: Optional[DocumentConfig] = None,
    correlation_id: Optional[str] = None
) -> XMLElement:
    """Convert an already-parsed foreign tree into an XMLElement tree.

    Args:
        source: lxml or ElementTree element (or element tree)
        config: Document configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Root XMLElement

    Raises:
        AdapterError: If no registered adapter accepts ``source``
    """
    if isinstance(source, XMLElement):
        return source

    adapter = _adapter_registry.adapter_for(source, config, correlation_id)
    if adapter is None:
        raise AdapterError(f"No tree adapter accepts {type(source).__name__}")
    return adapter.to_tree(source)


def parse_document(
    input_data: DocumentInput,
    config: Optional[DocumentConfig] = None,
    correlation_id: Optional[str] = None
) -> XMLElement:
    """Parse a document with lxml and adapt it into an XMLElement tree.

    Args:
        input_data: XML content as string, bytes, Path or file-like object
        config: Document configuration for the lxml parser and adapter
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Root XMLElement of the document

    Raises:
        AdapterError: If lxml rejects the document

    Examples:
        >>> root = parse_document("<root><item>value</item></root>")
        >>> root.name
        'root'
    """
    config = config or DocumentConfig()
    logger = get_logger(__name__, correlation_id, "parse_document")
    parser = etree.XMLParser(
        resolve_entities=config.resolve_entities,
        no_network=config.no_network,
        huge_tree=config.huge_tree,
        remove_comments=not config.keep_comments,
        remove_pis=not config.keep_processing_instructions,
    )

    try:
        root = _parse_with_lxml(input_data, parser)
    except (etree.XMLSyntaxError, OSError) as e:
        logger.warning(
            "Document rejected by lxml",
            extra={"input_type": type(input_data).__name__, "error": str(e)},
        )
        raise AdapterError(f"Failed to parse document: {e}") from e

    return LxmlAdapter(config, correlation_id).to_tree(root)


def _parse_with_lxml(input_data: DocumentInput, parser: Any) -> Any:
    if isinstance(input_data, bytes):
        return etree.fromstring(input_data, parser)
    if isinstance(input_data, str):
        try:
            return etree.fromstring(input_data, parser)
        except ValueError:
            # lxml refuses str input carrying an encoding declaration. The text
            # is already decoded, so the declared charset no longer applies.
            return etree.fromstring(_XML_DECLARATION.sub("", input_data, count=1), parser)
    if isinstance(input_data, Path):
        return etree.parse(str(input_data), parser).getroot()
    if hasattr(input_data, "read"):
        return etree.parse(input_data, parser).getroot()
    raise AdapterError(f"Unsupported document input type: {type(input_data).__name__}")
