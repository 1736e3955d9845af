"""Document tree model consumed by the query engine.

An element owns an ordered list of children. Each child is another element,
a text fragment, a comment, or a processing instruction. Only elements and
text fragments are meaningful to queries; the other kinds are kept so that an
adapted tree mirrors its source document.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union


@dataclass(frozen=True)
class XMLText:
    """A character data fragment."""

    content: str


@dataclass(frozen=True)
class XMLComment:
    """A comment; ignored by queries."""

    content: str


@dataclass(frozen=True)
class XMLProcessingInstruction:
    """A processing instruction; ignored by queries."""

    target: str
    content: str = ""


@dataclass(eq=False)
class XMLElement:
    """A named element with ordered children.

    Elements compare by identity: two elements with the same name and content
    are still different nodes of the document.
    """

    name: str
    children: List["XMLNode"] = field(default_factory=list)
    attributes: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate element name and children."""
        if not self.name:
            raise ValueError("Element name cannot be empty")
        for child in self.children:
            _check_child(child)

    @classmethod
    def leaf(
        cls, name: str, text: Optional[str] = None, **attributes: str
    ) -> "XMLElement":
        """Create an element holding a single text fragment."""
        children: List[XMLNode] = [] if text is None else [XMLText(text)]
        return cls(name, children, dict(attributes))

    @property
    def element_children(self) -> List["XMLElement"]:
        """Element children in document order."""
        return [child for child in self.children if isinstance(child, XMLElement)]

    @property
    def text_children(self) -> List[XMLText]:
        """Text fragments directly under this element, in document order."""
        return [child for child in self.children if isinstance(child, XMLText)]

    def add_child(self, child: "XMLNode") -> "XMLElement":
        """Append a child node and return this element for chaining."""
        _check_child(child)
        self.children.append(child)
        return self

    def add_text(self, content: str) -> "XMLElement":
        """Append a text fragment and return this element for chaining."""
        return self.add_child(XMLText(content))

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    def iter_descendants(self) -> Iterator["XMLElement"]:
        """Iterate over descendant elements in document order."""
        for child in self.element_children:
            yield child
            yield from child.iter_descendants()

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {"name": self.name}
        if self.attributes:
            result["attributes"] = dict(self.attributes)

        children: List[Any] = []
        for child in self.children:
            if isinstance(child, XMLElement):
                children.append(child.to_dict())
            elif isinstance(child, XMLText):
                children.append({"text": child.content})
            elif isinstance(child, XMLComment):
                children.append({"comment": child.content})
            else:
                children.append({"pi": child.target, "content": child.content})
        if children:
            result["children"] = children

        return result

    def __repr__(self) -> str:
        return (
            f"XMLElement(name={self.name!r}, "
            f"children={len(self.children)}, attributes={len(self.attributes)})"
        )


XMLNode = Union[XMLElement, XMLText, XMLComment, XMLProcessingInstruction]

_CHILD_TYPES = (XMLElement, XMLText, XMLComment, XMLProcessingInstruction)


def _check_child(child: Any) -> None:
    if not isinstance(child, _CHILD_TYPES):
        raise TypeError(
            "Child must be an XMLElement, XMLText, XMLComment or "
            f"XMLProcessingInstruction instance, got {type(child).__name__}"
        )
