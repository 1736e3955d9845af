"""Typed extraction of leaf values.

cast_must reads a mandatory leaf and surfaces every failure. cast_optional
reads an optional leaf: an absent leaf is None, and by default so is a present
leaf whose text cannot be converted.
"""

from typing import Any, Optional, Tuple

from xml_tree_query.query.conversion import get_converter
from xml_tree_query.query.errors import ConversionError, TextNotFoundError
from xml_tree_query.query.text import inner_text
from xml_tree_query.query.traversal import (
    PathLike,
    normalize_path,
    traverse_single_must,
    traverse_single_optional,
)
from xml_tree_query.shared import CorrelationLogger, get_logger
from xml_tree_query.tree.nodes import XMLElement

_logger = get_logger(__name__, component="casting")


def cast_optional(
    node: XMLElement,
    path: PathLike,
    target: Any,
    *,
    strict: bool = False,
    logger: Optional[CorrelationLogger] = None
) -> Optional[Any]:
    """Read the optional leaf at ``path`` as a ``target`` value.

    Args:
        node: Element to start from
        path: Path to the leaf
        target: Target type or TextConverter instance
        strict: Propagate conversion errors instead of reading them as None
        logger: Logger for traversal and absorbed failures

    Returns:
        The converted value, or None if the leaf is absent or (unless
        ``strict``) its text cannot be converted

    Raises:
        PathNotFoundError: An intermediate segment matched nothing
        MultipleNodeError: A segment matched more than one sibling
        ConversionError: Only when ``strict`` is set
        UnsupportedTargetError: No converter exists for ``target``
    """
    segments = normalize_path(path)
    converter = get_converter(target)
    log = logger or _logger

    leaf = traverse_single_optional(node, segments, logger=logger)
    if leaf is None:
        return None

    try:
        text = inner_text(leaf)
    except TextNotFoundError:
        return None

    try:
        return converter.convert_optional(text)
    except ConversionError as e:
        if strict:
            _attach_path(e, segments)
            raise
        log.debug(
            "Optional leaf value unreadable, treated as absent",
            extra={"path": "/".join(segments), "reason": str(e)},
        )
        return None


def cast_must(
    node: XMLElement,
    path: PathLike,
    target: Any,
    *,
    logger: Optional[CorrelationLogger] = None
) -> Any:
    """Read the mandatory leaf at ``path`` as a ``target`` value.

    A leaf without text is converted from the empty string.

    Raises:
        PathNotFoundError: Any segment matched nothing
        MultipleNodeError: Any segment matched more than one sibling
        ConversionError: The leaf text cannot be converted
        UnsupportedTargetError: No converter exists for ``target``
    """
    segments = normalize_path(path)
    converter = get_converter(target)

    leaf = traverse_single_must(node, segments, logger=logger)
    text = inner_text(leaf)
    try:
        return converter.convert(text)
    except ConversionError as e:
        _attach_path(e, segments)
        raise


def _attach_path(error: ConversionError, segments: Tuple[str, ...]) -> None:
    if error.path is None:
        error.path = segments
