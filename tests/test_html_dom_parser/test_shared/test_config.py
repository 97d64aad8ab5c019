"""Tests for parser configuration classes."""

import json

import pytest

from html_dom_parser.shared.config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
    ScannerConfig,
    SerializationConfig,
    TreeConfig,
)


class TestScannerConfig:
    """Test ScannerConfig defaults and validation."""

    def test_defaults(self) -> None:
        """Test default scanner configuration."""
        config = ScannerConfig()
        assert config.raw_text_elements == ("script", "style")
        assert config.discard_whitespace_text is True

    def test_names_are_lowercased(self) -> None:
        """Test raw text element names are normalized to lowercase."""
        config = ScannerConfig(raw_text_elements=["SCRIPT", "Textarea"])
        assert config.raw_text_elements == ("script", "textarea")

    def test_rejects_plain_string(self) -> None:
        """Test a bare string is not accepted as a name sequence."""
        with pytest.raises(ConfigValidationError, match="not a string"):
            ScannerConfig(raw_text_elements="script")

    def test_rejects_empty_name(self) -> None:
        """Test empty and whitespace names are rejected."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ScannerConfig(raw_text_elements=("script", ""))
        assert exc_info.value.field_name == "raw_text_elements"

        with pytest.raises(ConfigValidationError):
            ScannerConfig(raw_text_elements=("no script",))


class TestSerializationConfig:
    """Test SerializationConfig validation."""

    def test_default_order_is_sorted(self) -> None:
        """Test attributes are sorted by default."""
        assert SerializationConfig().attribute_order == "sorted"

    def test_insertion_order_accepted(self) -> None:
        """Test insertion order can be selected."""
        assert SerializationConfig("insertion").attribute_order == "insertion"

    def test_invalid_order(self) -> None:
        """Test unknown attribute orders are rejected."""
        with pytest.raises(ConfigValidationError, match="attribute_order must be one of") as exc_info:
            SerializationConfig(attribute_order="random")
        assert exc_info.value.value == "random"


class TestParserConfig:
    """Test the aggregate ParserConfig."""

    def test_defaults(self) -> None:
        """Test default component configurations."""
        config = ParserConfig()
        assert config.scanner == ScannerConfig()
        assert config.tree == TreeConfig()
        assert config.serialization == SerializationConfig()
        assert config.correlation_id is None

    def test_is_frozen(self) -> None:
        """Test that ParserConfig cannot be mutated."""
        config = ParserConfig()
        with pytest.raises(AttributeError):
            config.correlation_id = "abc"  # type: ignore[misc]

    def test_override_nested_fields(self) -> None:
        """Test override with component__field keys."""
        base = ParserConfig()
        config = base.override(
            scanner__discard_whitespace_text=False,
            serialization__attribute_order="insertion",
            correlation_id="req-1",
        )
        assert config.scanner.discard_whitespace_text is False
        assert config.serialization.attribute_order == "insertion"
        assert config.correlation_id == "req-1"
        # Original untouched
        assert base.scanner.discard_whitespace_text is True

    def test_override_unknown_component(self) -> None:
        """Test override rejects unknown components."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration component"):
            ParserConfig().override(renderer__width=10)

    def test_override_unknown_field(self) -> None:
        """Test override rejects unknown fields of a known component."""
        with pytest.raises(ConfigValidationError):
            ParserConfig().override(tree__max_depth=3)

    def test_override_revalidates(self) -> None:
        """Test overridden values go through component validation."""
        with pytest.raises(ConfigValidationError):
            ParserConfig().override(serialization__attribute_order="reverse")

    def test_dict_round_trip(self) -> None:
        """Test to_dict and from_dict agree."""
        config = ParserConfig().override(
            scanner__raw_text_elements=("script",),
            tree__measure_memory=True,
        )
        data = config.to_dict()
        assert data["scanner"]["raw_text_elements"] == ["script"]
        assert ParserConfig.from_dict(data) == config

    def test_json_round_trip(self) -> None:
        """Test to_json and from_json agree."""
        config = ParserConfig().override(serialization__attribute_order="insertion")
        text = config.to_json()
        assert json.loads(text)["serialization"]["attribute_order"] == "insertion"
        assert ParserConfig.from_json(text) == config

    def test_from_dict_rejects_unknown_keys(self) -> None:
        """Test unknown top-level and component keys are rejected."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration field"):
            ParserConfig.from_dict({"bogus": 1})
        with pytest.raises(ConfigValidationError, match="Unknown tree configuration fields"):
            ParserConfig.from_dict({"tree": {"bogus": 1}})

    def test_from_json_invalid(self) -> None:
        """Test malformed JSON and non-object JSON are rejected."""
        with pytest.raises(ConfigValidationError, match="Invalid configuration JSON"):
            ParserConfig.from_json("{not json")
        with pytest.raises(ConfigValidationError, match="must be an object"):
            ParserConfig.from_json("[1, 2]")

    def test_describe_lists_changes(self) -> None:
        """Test describe reports only non-default settings."""
        assert ParserConfig().describe() == []
        config = ParserConfig().override(tree__record_diagnostics=False)
        assert config.describe() == ["tree.record_diagnostics=False"]

    def test_validation_error_hierarchy(self) -> None:
        """Test ConfigValidationError is a ConfigError."""
        assert issubclass(ConfigValidationError, ConfigError)
