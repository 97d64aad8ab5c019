"""Configuration classes for HTML DOM parsing.

This module provides configuration objects for the scanner, the tree builder and
the serializer. Defaults reproduce the documented parsing behavior exactly; the
knobs only widen or narrow it.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

ATTRIBUTE_ORDERS = ("sorted", "insertion")
_COMPONENTS = ("scanner", "tree", "serialization")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        value: Any = None
    ) -> None:
        super().__init__(message)
        self.field_name = field_name
        self.value = value


@dataclass
class ScannerConfig:
    """Configuration for the markup scanner."""

    # Elements whose bodies are skipped verbatim instead of tokenized
    raw_text_elements: Tuple[str, ...] = ("script", "style")
    discard_whitespace_text: bool = True

    def __post_init__(self) -> None:
        """Validate scanner configuration."""
        if isinstance(self.raw_text_elements, str):
            raise ConfigValidationError(
                "raw_text_elements must be a sequence of tag names, not a string",
                "raw_text_elements",
                self.raw_text_elements,
            )
        self.raw_text_elements = tuple(
            name.lower() for name in self.raw_text_elements
        )
        for name in self.raw_text_elements:
            if not name or any(char.isspace() for char in name):
                raise ConfigValidationError(
                    f"Invalid raw text element name: {name!r}",
                    "raw_text_elements",
                    name,
                )


@dataclass
class TreeConfig:
    """Configuration for tree building."""

    record_diagnostics: bool = True
    measure_memory: bool = False


@dataclass
class SerializationConfig:
    """Configuration for outer/inner HTML serialization."""

    attribute_order: str = "sorted"  # sorted, insertion

    def __post_init__(self) -> None:
        """Validate serialization configuration."""
        if self.attribute_order not in ATTRIBUTE_ORDERS:
            raise ConfigValidationError(
                f"attribute_order must be one of {list(ATTRIBUTE_ORDERS)}",
                "attribute_order",
                self.attribute_order,
            )


@dataclass(frozen=True)
class ParserConfig:
    """Complete configuration for all parser components.

    Instances are immutable; use ``override`` to derive a modified copy.
    """

    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    serialization: SerializationConfig = field(default_factory=SerializationConfig)

    correlation_id: Optional[str] = None

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Component fields are addressed with a double underscore.

        Example:
            >>> config = ParserConfig().override(
            ...     scanner__discard_whitespace_text=False,
            ...     serialization__attribute_order="insertion",
            ... )
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}", key, value
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = {}
        for component, overrides in nested_overrides.items():
            try:
                new_fields[component] = replace(getattr(self, component), **overrides)
            except TypeError as e:
                raise ConfigValidationError(str(e), component) from e
        new_fields.update(top_level)

        try:
            return replace(self, **new_fields)
        except TypeError as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, (list, tuple)):
                return [_dataclass_to_dict(item) for item in obj]
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected rather than ignored.
        """
        component_types = {
            "scanner": ScannerConfig,
            "tree": TreeConfig,
            "serialization": SerializationConfig,
        }
        field_values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in component_types:
                target_class = component_types[key]
                unknown = set(value) - set(target_class.__dataclass_fields__)
                if unknown:
                    raise ConfigValidationError(
                        f"Unknown {key} configuration fields: {sorted(unknown)}",
                        key,
                        sorted(unknown),
                    )
                field_values[key] = target_class(**value)
            elif key in cls.__dataclass_fields__:
                field_values[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}", key, value
                )
        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    def describe(self) -> List[str]:
        """List the settings that differ from the defaults."""
        defaults = ParserConfig().to_dict()
        current = self.to_dict()
        changes = []
        for component in _COMPONENTS:
            for name, value in current[component].items():
                if defaults[component][name] != value:
                    changes.append(f"{component}.{name}={value!r}")
        if self.correlation_id is not None:
            changes.append(f"correlation_id={self.correlation_id!r}")
        return changes
