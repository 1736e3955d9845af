"""Declarative extraction of records from repeated elements.

A record is a dictionary built from one element by casting each field's leaf.
Response decoders describe a record once with FieldSpec entries and apply it
to every element of a list, e.g. each ``Containers/Container``.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from xml_tree_query.query.casting import cast_must, cast_optional
from xml_tree_query.query.traversal import PathLike, normalize_path, traverse
from xml_tree_query.shared import CorrelationLogger
from xml_tree_query.tree.nodes import XMLElement


@dataclass(frozen=True)
class FieldSpec:
    """One field of a record.

    Attributes:
        name: Key of the field in the extracted dictionary
        path: Path from the record element to the leaf
        target: Target type or TextConverter instance
        required: Read with cast_must when True, cast_optional otherwise
    """

    name: str
    path: PathLike
    target: Any = str
    required: bool = True

    def __post_init__(self) -> None:
        """Validate the field and normalize its path."""
        if not self.name:
            raise ValueError("Field name cannot be empty")
        object.__setattr__(self, "path", normalize_path(self.path))


def extract_record(
    node: XMLElement,
    fields: Sequence[FieldSpec],
    *,
    strict: bool = False,
    logger: Optional[CorrelationLogger] = None
) -> Dict[str, Any]:
    """Extract one record from ``node``.

    The first failing required field (or optional field, with ``strict``)
    raises; later fields are not read.
    """
    record: Dict[str, Any] = {}
    for spec in fields:
        if spec.required:
            record[spec.name] = cast_must(node, spec.path, spec.target, logger=logger)
        else:
            record[spec.name] = cast_optional(
                node, spec.path, spec.target, strict=strict, logger=logger
            )
    return record


def extract_records(
    node: XMLElement,
    path: PathLike,
    fields: Sequence[FieldSpec],
    *,
    strict: bool = False,
    logger: Optional[CorrelationLogger] = None
) -> List[Dict[str, Any]]:
    """Extract a record from every element matched by ``path``.

    An absent list (last segment matching nothing) gives an empty list.
    Records are returned in document order.
    """
    matches = traverse(node, path, True, logger=logger)
    return [
        extract_record(match, fields, strict=strict, logger=logger)
        for match in matches
    ]
