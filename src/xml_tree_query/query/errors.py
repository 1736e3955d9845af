"""Exceptions raised by tree queries."""

from typing import Any, Optional, Sequence, Tuple


class TraversalError(Exception):
    """Base exception for all query failures.

    Attributes:
        path: The full path being queried, when known
    """

    def __init__(self, message: str, path: Optional[Sequence[str]] = None) -> None:
        super().__init__(message)
        self.path: Optional[Tuple[str, ...]] = tuple(path) if path is not None else None


class PathNotFoundError(TraversalError):
    """A required segment had no matching child element."""

    def __init__(self, segment: str, path: Optional[Sequence[str]] = None) -> None:
        super().__init__(f"Path not found: {segment}", path)
        self.segment = segment


class MultipleNodeError(TraversalError):
    """More than one sibling matched a segment that must be unique."""

    def __init__(self, segment: str, path: Optional[Sequence[str]] = None) -> None:
        super().__init__(f"Multiple nodes match: {segment}", path)
        self.segment = segment


class TextNotFoundError(TraversalError):
    """An element has no text content.

    Reserved: inner_text reads a missing text child as the empty string.
    """

    def __init__(self, path: Optional[Sequence[str]] = None) -> None:
        super().__init__("Text not found", path)


class ConversionError(TraversalError):
    """Leaf text could not be converted to the requested type."""

    def __init__(
        self,
        text: str,
        target: Any,
        reason: Optional[str] = None,
        path: Optional[Sequence[str]] = None
    ) -> None:
        target_name = getattr(target, "__name__", str(target))
        message = f"Cannot convert {text!r} to {target_name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, path)
        self.text = text
        self.target = target
        self.reason = reason


class BooleanNotMatchedError(ConversionError):
    """Text is neither ``true`` nor ``false``."""

    def __init__(self, text: str) -> None:
        super().__init__(text, bool, "expected 'true' or 'false'")


class EnumerationNotMatchedError(ConversionError):
    """Text matches no member of the target enumeration."""


class DateTimeParseError(ConversionError):
    """Text is not a recognised date-time."""


class UnsupportedTargetError(TypeError):
    """No converter is available for the requested target type."""

    def __init__(self, target: Any) -> None:
        super().__init__(f"No text converter for target {target!r}")
        self.target = target
