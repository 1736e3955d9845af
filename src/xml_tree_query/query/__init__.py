"""Path queries and typed extraction over XMLElement trees.

Key Components:
    find_subnodes: Direct children matching a name
    traverse: Segment-by-segment walk with multiplicity rules
    traverse_single_must / traverse_single_optional: Exactly-one / zero-or-one
    inner_text: First text fragment of an element
    cast_must / cast_optional: Typed leaf values through pluggable converters
    extract_record / extract_records: Declarative record decoding
"""

from .casting import cast_must, cast_optional
from .conversion import (
    I32,
    I64,
    U32,
    U64,
    BooleanConverter,
    ClassConverter,
    ConverterRegistry,
    DateTimeConverter,
    EnumConverter,
    FloatConverter,
    FromText,
    IntegerConverter,
    StringConverter,
    TextConverter,
    get_converter,
    register_converter,
    unregister_converter,
)
from .errors import (
    BooleanNotMatchedError,
    ConversionError,
    DateTimeParseError,
    EnumerationNotMatchedError,
    MultipleNodeError,
    PathNotFoundError,
    TextNotFoundError,
    TraversalError,
    UnsupportedTargetError,
)
from .records import FieldSpec, extract_record, extract_records
from .text import inner_text
from .traversal import (
    PathLike,
    find_subnodes,
    normalize_path,
    traverse,
    traverse_single_must,
    traverse_single_optional,
)

__all__ = [
    "cast_must",
    "cast_optional",
    "I32",
    "I64",
    "U32",
    "U64",
    "BooleanConverter",
    "ClassConverter",
    "ConverterRegistry",
    "DateTimeConverter",
    "EnumConverter",
    "FloatConverter",
    "FromText",
    "IntegerConverter",
    "StringConverter",
    "TextConverter",
    "get_converter",
    "register_converter",
    "unregister_converter",
    "BooleanNotMatchedError",
    "ConversionError",
    "DateTimeParseError",
    "EnumerationNotMatchedError",
    "MultipleNodeError",
    "PathNotFoundError",
    "TextNotFoundError",
    "TraversalError",
    "UnsupportedTargetError",
    "FieldSpec",
    "extract_record",
    "extract_records",
    "inner_text",
    "PathLike",
    "find_subnodes",
    "normalize_path",
    "traverse",
    "traverse_single_must",
    "traverse_single_optional",
]
