"""Path traversal over XMLElement trees.

A path is a sequence of element names. Each segment selects the direct
children of the current element carrying that name. Only the final segment
may match several siblings: an ambiguous intermediate segment has no single
element to continue from and fails with MultipleNodeError.

All functions here only read the tree and return references into it.
Concurrent queries over a tree that nobody mutates are safe.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from xml_tree_query.query.errors import MultipleNodeError, PathNotFoundError
from xml_tree_query.shared import CorrelationLogger, get_logger
from xml_tree_query.tree.nodes import XMLElement

PathLike = Union[str, Sequence[str]]

DEFAULT_SEPARATOR = "/"

_logger = get_logger(__name__, component="traversal")


def normalize_path(path: PathLike, separator: str = DEFAULT_SEPARATOR) -> Tuple[str, ...]:
    """Turn a path given as a string or a sequence of names into a tuple.

    A string is split on ``separator`` after stripping leading and trailing
    separators, so ``""`` and ``"/"`` both denote the empty path.

    Raises:
        TypeError: If a segment is not a string
        ValueError: If a string path contains an empty segment, as in ``"a//b"``
    """
    if isinstance(path, str):
        stripped = path.strip(separator)
        if not stripped:
            return ()
        segments = tuple(stripped.split(separator))
        if "" in segments:
            raise ValueError(f"Path {path!r} contains an empty segment")
        return segments

    segments = tuple(path)
    for segment in segments:
        if not isinstance(segment, str):
            raise TypeError(
                f"Path segments must be strings, got {type(segment).__name__}"
            )
    return segments


def find_subnodes(node: XMLElement, name: str) -> List[XMLElement]:
    """Return the direct element children of ``node`` named ``name``.

    Children are returned in document order. Descendants below the direct
    children are never inspected. An empty list means nothing matched.
    """
    return [
        child for child in node.children
        if isinstance(child, XMLElement) and child.name == name
    ]


def traverse(
    node: XMLElement,
    path: PathLike,
    ignore_empty_leaf: bool = False,
    *,
    logger: Optional[CorrelationLogger] = None
) -> List[XMLElement]:
    """Walk ``path`` from ``node`` and return the elements matched by its last segment.

    Args:
        node: Element to start from
        path: Segment names, as a sequence or a ``/``-separated string
        ignore_empty_leaf: Return an empty list instead of failing when only
            the last segment matches nothing
        logger: Logger to trace the walk with

    Returns:
        Elements matched by the final segment in document order, or
        ``[node]`` for an empty path

    Raises:
        PathNotFoundError: A segment matched nothing where absence is not allowed
        MultipleNodeError: A segment other than the last matched several siblings
    """
    segments = normalize_path(path)
    log = logger or _logger

    if not segments:
        return [node]

    current = node
    last_index = len(segments) - 1
    for index, segment in enumerate(segments):
        matches = find_subnodes(current, segment)
        is_last = index == last_index

        if not matches:
            if is_last and ignore_empty_leaf:
                _trace(log, segments, ignore_empty_leaf, 0)
                return matches
            raise PathNotFoundError(segment, segments)

        if len(matches) > 1 and not is_last:
            raise MultipleNodeError(segment, segments)

        if is_last:
            _trace(log, segments, ignore_empty_leaf, len(matches))
            return matches

        current = matches[0]

    raise AssertionError("unreachable: loop always returns on the last segment")


def traverse_single_must(
    node: XMLElement,
    path: PathLike,
    *,
    logger: Optional[CorrelationLogger] = None
) -> XMLElement:
    """Resolve ``path`` to exactly one element.

    Raises:
        PathNotFoundError: Any segment, including the last, matched nothing
        MultipleNodeError: Any segment matched more than one sibling
    """
    segments = normalize_path(path)
    matches = traverse(node, segments, False, logger=logger)
    if len(matches) > 1:
        raise MultipleNodeError(segments[-1], segments)
    return matches[0]


def traverse_single_optional(
    node: XMLElement,
    path: PathLike,
    *,
    logger: Optional[CorrelationLogger] = None
) -> Optional[XMLElement]:
    """Resolve ``path`` to at most one element.

    Returns:
        The matched element, or None when the last segment matched nothing

    Raises:
        PathNotFoundError: An intermediate segment matched nothing
        MultipleNodeError: Any segment matched more than one sibling
    """
    segments = normalize_path(path)
    matches = traverse(node, segments, True, logger=logger)
    if len(matches) > 1:
        raise MultipleNodeError(segments[-1], segments)
    if not matches:
        return None
    return matches[0]


def _trace(
    log: CorrelationLogger,
    segments: Tuple[str, ...],
    ignore_empty_leaf: bool,
    match_count: int
) -> None:
    if log.is_enabled_for(logging.DEBUG):
        log.debug(
            "Traversed path",
            extra={
                "path": "/".join(segments),
                "ignore_empty_leaf": ignore_empty_leaf,
                "match_count": match_count,
            },
        )
