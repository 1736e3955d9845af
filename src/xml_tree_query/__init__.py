"""XML Tree Query.

Path-based queries and typed extraction over parsed XML trees. A path is a
sequence of element names; each segment selects direct children, only the
last segment may match several siblings, and leaf text is converted to typed
values through pluggable converters.

Progressive API Disclosure:
- Level 1: Simple functions - traverse(), cast_must(), cast_optional(), ...
- Level 2: Configured engine - TreeQuery class
- Level 3: Custom converters and tree adapters - register_converter(),
  register_adapter()
"""

__version__ = "0.1.0"
__author__ = "XML Tree Query Team"

# Progressive API disclosure - Level 2: Configured engine
from .api import TreeQuery

# Progressive API disclosure - Level 1: Simple functions
from .query import (
    ConversionError,
    FieldSpec,
    MultipleNodeError,
    PathNotFoundError,
    TextConverter,
    TextNotFoundError,
    TraversalError,
    UnsupportedTargetError,
    cast_must,
    cast_optional,
    extract_record,
    extract_records,
    find_subnodes,
    inner_text,
    register_converter,
    traverse,
    traverse_single_must,
    traverse_single_optional,
)

# Configuration classes for advanced usage
from .shared import DocumentConfig, EngineConfig, QueryConfig

# Tree model and document boundary
from .tree import (
    XMLElement,
    XMLText,
    adapt_tree,
    parse_document,
    register_adapter,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple query functions
    "find_subnodes",
    "traverse",
    "traverse_single_must",
    "traverse_single_optional",
    "inner_text",
    "cast_must",
    "cast_optional",
    "extract_record",
    "extract_records",
    "FieldSpec",

    # Level 2: Configured engine
    "TreeQuery",

    # Level 3: Extension points
    "TextConverter",
    "register_converter",
    "register_adapter",

    # Tree model and document boundary
    "XMLElement",
    "XMLText",
    "adapt_tree",
    "parse_document",

    # Errors
    "TraversalError",
    "PathNotFoundError",
    "MultipleNodeError",
    "TextNotFoundError",
    "ConversionError",
    "UnsupportedTargetError",

    # Configuration classes for advanced usage
    "DocumentConfig",
    "EngineConfig",
    "QueryConfig",
]
