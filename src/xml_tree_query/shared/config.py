"""Configuration classes for tree queries and document adaptation.

Configuration objects are frozen dataclasses so that a single instance can be
shared between threads querying the same tree.
"""

import json
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Optional

_COMPONENTS = ("query", "document")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class QueryConfig:
    """Configuration for path traversal and typed extraction."""

    path_separator: str = "/"
    strict_optional_conversion: bool = False  # Propagate conversion errors in cast_optional

    def __post_init__(self) -> None:
        """Validate query configuration."""
        if not isinstance(self.path_separator, str) or not self.path_separator:
            raise ValueError("path_separator must be a non-empty string")
        if self.path_separator.isspace():
            raise ValueError("path_separator cannot be whitespace")


@dataclass(frozen=True)
class DocumentConfig:
    """Configuration for parsing documents and adapting them into query trees."""

    resolve_entities: bool = False
    no_network: bool = True
    huge_tree: bool = False
    keep_comments: bool = True
    keep_processing_instructions: bool = True
    drop_whitespace_text: bool = False  # Skip text fragments made only of whitespace

    def __post_init__(self) -> None:
        """Validate document configuration."""
        if self.resolve_entities and not self.no_network:
            raise ValueError(
                "resolve_entities requires no_network to stay enabled"
            )


@dataclass(frozen=True)
class EngineConfig:
    """Complete configuration for the query engine.

    Bundles the query and document configurations with descriptive metadata.
    Thread-safe due to frozen dataclass implementation.
    """

    query: QueryConfig = field(default_factory=QueryConfig)
    document: DocumentConfig = field(default_factory=DocumentConfig)

    version: str = "1.0.0"
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete engine configuration."""
        if not isinstance(self.query, QueryConfig):
            raise ConfigValidationError(
                "query must be a QueryConfig instance", field_name="query"
            )
        if not isinstance(self.document, DocumentConfig):
            raise ConfigValidationError(
                "document must be a DocumentConfig instance", field_name="document"
            )

    def override(self, **kwargs: Any) -> "EngineConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Field overrides; component fields use the
                ``component__field`` notation

        Returns:
            New EngineConfig instance with overrides applied

        Example:
            >>> config = EngineConfig()
            >>> config.override(query__path_separator=".").query.path_separator
            '.'
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"Use one of: {', '.join(_COMPONENTS)}"],
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for component, overrides in nested_overrides.items():
                new_fields[component] = replace(getattr(self, component), **overrides)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

        new_fields.update(top_level)
        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Create configuration from dictionary.

        Args:
            data: Dictionary containing configuration data

        Returns:
            EngineConfig instance created from dictionary
        """
        try:
            values = dict(data)
            if "query" in values:
                values["query"] = QueryConfig(**values["query"])
            if "document" in values:
                values["document"] = DocumentConfig(**values["document"])
            return cls(**values)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(
                f"Failed to deserialize to {cls.__name__}: {e}"
            ) from e

    @classmethod
    def from_json(cls, json_str: str) -> "EngineConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def strict(cls) -> "EngineConfig":
        """Create preset that surfaces malformed optional values as errors."""
        return cls(
            query=QueryConfig(strict_optional_conversion=True),
            document=DocumentConfig(keep_comments=False),
            name="strict",
            description="Malformed optional leaves raise instead of reading as absent",
        )

    @classmethod
    def lenient(cls) -> "EngineConfig":
        """Create preset for loosely formatted service responses."""
        return cls(
            query=QueryConfig(strict_optional_conversion=False),
            document=DocumentConfig(drop_whitespace_text=True),
            name="lenient",
            description="Whitespace-only text is skipped and malformed optionals read as absent",
        )
