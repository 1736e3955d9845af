"""Conversion of leaf text into typed values.

Each target type brings its own converter. The casting functions never switch
on the target type; they ask the converter registry, which is open to new
types in three ways:

- pass a TextConverter instance as the target,
- give the target class a ``from_text`` classmethod (and optionally
  ``from_text_optional``),
- register a converter with register_converter().

Enumerations are handled without registration.
"""

import re
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Any, Dict, Generic, Optional, Protocol, Type, TypeVar

from xml_tree_query.query.errors import (
    BooleanNotMatchedError,
    ConversionError,
    DateTimeParseError,
    EnumerationNotMatchedError,
    UnsupportedTargetError,
)

T = TypeVar("T")

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class FromText(Protocol):
    """Protocol for classes that parse themselves from leaf text."""

    @classmethod
    def from_text(cls, text: str) -> Any:
        ...


class TextConverter(ABC, Generic[T]):
    """Converts leaf text into a value of one target type.

    ``convert`` is used for mandatory leaves. ``convert_optional`` is used for
    optional leaves; by default an empty text means the value is absent.
    """

    name: str = "value"

    @abstractmethod
    def convert(self, text: str) -> T:
        """Convert ``text`` or raise ConversionError."""

    def convert_optional(self, text: str) -> Optional[T]:
        """Convert ``text`` for an optional leaf; empty text reads as None."""
        if text == "":
            return None
        return self.convert(text)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"


class IntegerConverter(TextConverter[int]):
    """Strict decimal integers with optional range bounds.

    Surrounding whitespace, underscores and non-ASCII digits are rejected.
    """

    def __init__(
        self,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
        name: str = "int"
    ) -> None:
        if min_value is not None and max_value is not None and min_value > max_value:
            raise ValueError("min_value must be <= max_value")
        self.min_value = min_value
        self.max_value = max_value
        self.name = name

    def convert(self, text: str) -> int:
        if not _INTEGER_PATTERN.fullmatch(text):
            raise ConversionError(text, self.name, "not a decimal integer")
        value = int(text)
        if self.min_value is not None and value < self.min_value:
            raise ConversionError(text, self.name, f"below minimum {self.min_value}")
        if self.max_value is not None and value > self.max_value:
            raise ConversionError(text, self.name, f"above maximum {self.max_value}")
        return value


U64 = IntegerConverter(0, 2 ** 64 - 1, name="u64")
I64 = IntegerConverter(-(2 ** 63), 2 ** 63 - 1, name="i64")
U32 = IntegerConverter(0, 2 ** 32 - 1, name="u32")
I32 = IntegerConverter(-(2 ** 31), 2 ** 31 - 1, name="i32")


class FloatConverter(TextConverter[float]):
    """Floating point numbers without surrounding whitespace."""

    name = "float"

    def convert(self, text: str) -> float:
        if not text or text != text.strip() or "_" in text:
            raise ConversionError(text, self.name, "not a number")
        try:
            return float(text)
        except ValueError as e:
            raise ConversionError(text, self.name, "not a number") from e


class BooleanConverter(TextConverter[bool]):
    """Exactly ``true`` or ``false``."""

    name = "bool"

    def convert(self, text: str) -> bool:
        if text == "true":
            return True
        if text == "false":
            return False
        raise BooleanNotMatchedError(text)


class StringConverter(TextConverter[str]):
    """Text as-is. An empty optional leaf stays an empty string."""

    name = "str"

    def convert(self, text: str) -> str:
        return text

    def convert_optional(self, text: str) -> Optional[str]:
        return text


class EnumConverter(TextConverter[Enum]):
    """Members of an enumeration, matched by value first and then by name."""

    def __init__(self, enum_cls: Type[Enum]) -> None:
        self.enum_cls = enum_cls
        self.name = enum_cls.__name__

    def convert(self, text: str) -> Enum:
        for member in self.enum_cls:
            if member.value == text or str(member.value) == text:
                return member
        for member in self.enum_cls:
            if member.name == text:
                return member
        expected = ", ".join(str(member.value) for member in self.enum_cls)
        raise EnumerationNotMatchedError(text, self.enum_cls, f"expected one of {expected}")


class DateTimeConverter(TextConverter[datetime]):
    """RFC 1123 (``Mon, 23 Nov 2015 21:12:35 GMT``) or ISO 8601 date-times.

    Values without an offset are taken as UTC.
    """

    name = "datetime"

    def convert(self, text: str) -> datetime:
        value = self._parse_rfc1123(text)
        if value is None:
            value = self._parse_iso8601(text)
        if value is None:
            raise DateTimeParseError(text, datetime, "expected RFC 1123 or ISO 8601")
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    @staticmethod
    def _parse_rfc1123(text: str) -> Optional[datetime]:
        try:
            return parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return None

    @staticmethod
    def _parse_iso8601(text: str) -> Optional[datetime]:
        candidate = text[:-1] + "+00:00" if text.endswith("Z") else text
        try:
            return datetime.fromisoformat(candidate)
        except ValueError:
            return None


class ClassConverter(TextConverter[Any]):
    """Adapts a class following the FromText protocol.

    ValueError raised by ``from_text`` is reported as ConversionError.
    """

    def __init__(self, target: Type[Any]) -> None:
        self.target = target
        self.name = target.__name__

    def convert(self, text: str) -> Any:
        try:
            return self.target.from_text(text)
        except ValueError as e:
            raise ConversionError(text, self.target, str(e)) from e

    def convert_optional(self, text: str) -> Optional[Any]:
        from_text_optional = getattr(self.target, "from_text_optional", None)
        if from_text_optional is None:
            return super().convert_optional(text)
        try:
            return from_text_optional(text)
        except ValueError as e:
            raise ConversionError(text, self.target, str(e)) from e


class ConverterRegistry:
    """Registry mapping target types to converters."""

    def __init__(self) -> None:
        self._converters: Dict[type, TextConverter[Any]] = {}
        self._lock = threading.Lock()

    def register(self, target_type: type, converter: TextConverter[Any]) -> None:
        """Register ``converter`` for ``target_type``, replacing any previous one."""
        if not isinstance(converter, TextConverter):
            raise TypeError("converter must be a TextConverter instance")
        with self._lock:
            converters = dict(self._converters)
            converters[target_type] = converter
            self._converters = converters

    def unregister(self, target_type: type) -> None:
        """Remove the converter registered for ``target_type``, if any."""
        with self._lock:
            converters = dict(self._converters)
            converters.pop(target_type, None)
            self._converters = converters

    def resolve(self, target: Any) -> TextConverter[Any]:
        """Find the converter for ``target``.

        Raises:
            UnsupportedTargetError: If nothing can convert to ``target``
        """
        if isinstance(target, TextConverter):
            return target
        if not isinstance(target, type):
            raise UnsupportedTargetError(target)

        if callable(getattr(target, "from_text", None)):
            return ClassConverter(target)

        converters = self._converters
        if target in converters:
            return converters[target]
        if issubclass(target, Enum):
            return EnumConverter(target)
        for base in target.__mro__[1:]:
            if base in converters:
                return converters[base]

        raise UnsupportedTargetError(target)


_registry = ConverterRegistry()
_registry.register(int, IntegerConverter())
_registry.register(float, FloatConverter())
_registry.register(bool, BooleanConverter())
_registry.register(str, StringConverter())
_registry.register(datetime, DateTimeConverter())


def register_converter(target_type: type, converter: TextConverter[Any]) -> None:
    """Register a converter globally for ``target_type``."""
    _registry.register(target_type, converter)


def unregister_converter(target_type: type) -> None:
    """Remove a globally registered converter."""
    _registry.unregister(target_type)


def get_converter(target: Any) -> TextConverter[Any]:
    """Get the converter for a target type or converter instance."""
    return _registry.resolve(target)
