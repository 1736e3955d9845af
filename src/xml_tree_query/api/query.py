"""Configured query API.

The module-level functions of ``xml_tree_query`` cover the common case with
default settings. TreeQuery binds an EngineConfig and a correlation ID so that
every query issued while decoding one response shares settings and log
context.
"""

from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Sequence, TextIO, Tuple, Union

from xml_tree_query.query import (
    FieldSpec,
    PathLike,
    cast_must,
    cast_optional,
    extract_record,
    extract_records,
    find_subnodes,
    inner_text,
    normalize_path,
    traverse,
    traverse_single_must,
    traverse_single_optional,
)
from xml_tree_query.shared import EngineConfig, get_logger
from xml_tree_query.tree import XMLElement, adapt_tree, parse_document

InputType = Union[str, bytes, BinaryIO, TextIO, Path]


class TreeQuery:
    """Query engine bound to a configuration and a correlation ID.

    Instances hold no per-query state and may be shared between threads as
    long as the queried trees are not mutated.

    Examples:
        >>> query = TreeQuery()
        >>> root = query.parse("<r><a><b>7</b></a></r>")
        >>> query.cast_must(root, "a/b", int)
        7
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the query engine.

        Args:
            config: Engine configuration, defaults to EngineConfig()
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or EngineConfig()
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, "TreeQuery")

    def with_correlation_id(self, correlation_id: Optional[str]) -> "TreeQuery":
        """Engine sharing this configuration under another correlation ID."""
        return TreeQuery(self.config, correlation_id)

    def path(self, path: PathLike) -> Tuple[str, ...]:
        """Normalize ``path`` using the configured separator."""
        return normalize_path(path, self.config.query.path_separator)

    # Document boundary
    def parse(self, input_data: InputType) -> XMLElement:
        """Parse a document with the configured document settings."""
        return parse_document(input_data, self.config.document, self.correlation_id)

    def adapt(self, source: Any) -> XMLElement:
        """Adapt an lxml or ElementTree tree with the configured document settings."""
        return adapt_tree(source, self.config.document, self.correlation_id)

    # Node queries
    def find_subnodes(self, node: XMLElement, name: str) -> List[XMLElement]:
        """Direct element children of ``node`` named ``name``."""
        return find_subnodes(node, name)

    def traverse(
        self, node: XMLElement, path: PathLike, ignore_empty_leaf: bool = False
    ) -> List[XMLElement]:
        """Elements matched by the last segment of ``path``."""
        return traverse(node, self.path(path), ignore_empty_leaf, logger=self._logger)

    def single_must(self, node: XMLElement, path: PathLike) -> XMLElement:
        """Exactly one element at ``path``."""
        return traverse_single_must(node, self.path(path), logger=self._logger)

    def single_optional(self, node: XMLElement, path: PathLike) -> Optional[XMLElement]:
        """At most one element at ``path``."""
        return traverse_single_optional(node, self.path(path), logger=self._logger)

    def inner_text(self, node: XMLElement, path: PathLike = ()) -> str:
        """Text of the single element at ``path`` (``node`` itself by default)."""
        return inner_text(self.single_must(node, path))

    # Typed values
    def cast_optional(self, node: XMLElement, path: PathLike, target: Any) -> Optional[Any]:
        """Optional leaf value, honouring ``strict_optional_conversion``."""
        return cast_optional(
            node,
            self.path(path),
            target,
            strict=self.config.query.strict_optional_conversion,
            logger=self._logger,
        )

    def cast_must(self, node: XMLElement, path: PathLike, target: Any) -> Any:
        """Mandatory leaf value."""
        return cast_must(node, self.path(path), target, logger=self._logger)

    def extract_record(
        self, node: XMLElement, fields: Sequence[FieldSpec]
    ) -> Dict[str, Any]:
        """Record built from the leaves described by ``fields``."""
        return extract_record(
            node,
            fields,
            strict=self.config.query.strict_optional_conversion,
            logger=self._logger,
        )

    def extract_records(
        self, node: XMLElement, path: PathLike, fields: Sequence[FieldSpec]
    ) -> List[Dict[str, Any]]:
        """One record per element matched by ``path``."""
        return extract_records(
            node,
            self.path(path),
            fields,
            strict=self.config.query.strict_optional_conversion,
            logger=self._logger,
        )
