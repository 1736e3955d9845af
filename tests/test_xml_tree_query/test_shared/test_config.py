"""Tests for the configuration system."""

import json
from dataclasses import FrozenInstanceError

import pytest

from xml_tree_query.shared.config import (
    ConfigError,
    ConfigValidationError,
    DocumentConfig,
    EngineConfig,
    QueryConfig,
)


class TestQueryConfig:
    """Test suite for QueryConfig."""

    def test_default_configuration(self) -> None:
        """Test default query configuration values."""
        config = QueryConfig()

        assert config.path_separator == "/"
        assert config.strict_optional_conversion is False

    @pytest.mark.parametrize("separator", ["", " "])
    def test_invalid_separator_raises_error(self, separator: str) -> None:
        """Test separator validation."""
        with pytest.raises(ValueError, match="path_separator"):
            QueryConfig(path_separator=separator)

    def test_configuration_is_frozen(self) -> None:
        """Test immutability."""
        config = QueryConfig()

        with pytest.raises(FrozenInstanceError):
            config.path_separator = "."  # type: ignore


class TestDocumentConfig:
    """Test suite for DocumentConfig."""

    def test_default_configuration(self) -> None:
        """Test safe parsing defaults."""
        config = DocumentConfig()

        assert config.resolve_entities is False
        assert config.no_network is True
        assert config.huge_tree is False
        assert config.keep_comments is True
        assert config.keep_processing_instructions is True
        assert config.drop_whitespace_text is False

    def test_entity_resolution_requires_no_network(self) -> None:
        """Test that resolving entities over the network is refused."""
        with pytest.raises(ValueError, match="resolve_entities requires no_network"):
            DocumentConfig(resolve_entities=True, no_network=False)


class TestEngineConfig:
    """Test suite for EngineConfig."""

    def test_default_components(self) -> None:
        """Test default nested configuration."""
        config = EngineConfig()

        assert config.query == QueryConfig()
        assert config.document == DocumentConfig()
        assert config.version == "1.0.0"

    def test_invalid_component_type_raises_error(self) -> None:
        """Test component type validation."""
        with pytest.raises(ConfigValidationError) as exc_info:
            EngineConfig(query={"path_separator": "."})  # type: ignore

        assert exc_info.value.field_name == "query"

    def test_override_nested_fields(self) -> None:
        """Test component__field overrides."""
        config = EngineConfig().override(
            query__path_separator=".",
            document__keep_comments=False,
            name="custom",
        )

        assert config.query.path_separator == "."
        assert config.document.keep_comments is False
        assert config.name == "custom"

    def test_override_leaves_original_untouched(self) -> None:
        """Test that override returns a new instance."""
        original = EngineConfig()

        original.override(query__strict_optional_conversion=True)

        assert original.query.strict_optional_conversion is False

    def test_override_unknown_component_raises_error(self) -> None:
        """Test unknown component names."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration component") as exc_info:
            EngineConfig().override(tokenizer__fast=True)

        assert exc_info.value.suggestions

    def test_override_invalid_value_raises_error(self) -> None:
        """Test that component validation errors are wrapped."""
        with pytest.raises(ConfigValidationError, match="path_separator"):
            EngineConfig().override(query__path_separator="")

    def test_json_round_trip(self) -> None:
        """Test serialization and deserialization."""
        config = EngineConfig.strict()

        restored = EngineConfig.from_json(config.to_json())

        assert restored == config
        assert json.loads(config.to_json())["query"]["strict_optional_conversion"] is True

    def test_from_dict_with_unknown_field_raises_error(self) -> None:
        """Test deserialization validation."""
        with pytest.raises(ConfigValidationError, match="Failed to deserialize"):
            EngineConfig.from_dict({"query": {"no_such_field": 1}})

    def test_presets(self) -> None:
        """Test preset factories."""
        strict = EngineConfig.strict()
        lenient = EngineConfig.lenient()

        assert strict.name == "strict"
        assert strict.query.strict_optional_conversion is True
        assert lenient.name == "lenient"
        assert lenient.document.drop_whitespace_text is True

    def test_validation_error_is_config_error(self) -> None:
        """Test exception hierarchy."""
        assert issubclass(ConfigValidationError, ConfigError)
