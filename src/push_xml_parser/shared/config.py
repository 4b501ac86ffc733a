"""Configuration classes for push-style XML parsing.

The parser core has no tunable behavior: well-formedness rules are fixed.
Configuration covers how input sources are turned into character streams and
how parse runs are logged and correlated.
"""

import codecs
import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

DEFAULT_BUFFER_SIZE = 8192
VALID_DECODE_ERRORS = ("strict", "replace", "ignore")
VALID_LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_COMPONENTS = ("stream", "global_")


@dataclass
class StreamConfig:
    """Configuration for turning byte and file sources into character streams."""

    encoding: str = "utf-8"
    errors: str = "strict"
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self) -> None:
        """Validate stream configuration."""
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {self.encoding}") from e
        if self.errors not in VALID_DECODE_ERRORS:
            raise ValueError(f"errors must be one of {list(VALID_DECODE_ERRORS)}")
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be > 0")


@dataclass
class GlobalConfig:
    """Settings that apply to every parse run."""

    logging_level: str = "WARNING"
    enable_correlation_tracking: bool = True
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {list(VALID_LOGGING_LEVELS)}")


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
class ParserConfig:
    """Immutable configuration shared by the parser, the convenience API and the CLI."""

    stream: StreamConfig = field(default_factory=StreamConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete parser configuration."""
        if not isinstance(self.stream, StreamConfig):
            raise ConfigValidationError("stream must be a StreamConfig", field_name="stream")
        if not isinstance(self.global_, GlobalConfig):
            raise ConfigValidationError("global_ must be a GlobalConfig", field_name="global_")
        try:
            self.stream.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Nested fields are addressed as ``component__field``.

        Example:
            >>> config = ParserConfig().override(stream__encoding="latin-1")
            >>> config.stream.encoding
            'latin-1'
        """
        nested: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.rsplit("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=list(_COMPONENTS),
                    )
                nested.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = dict(top_level)
        try:
            for component, overrides in nested.items():
                new_fields[component] = replace(getattr(self, component), **overrides)
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from a dictionary, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be a mapping")

        def _dict_to_dataclass(data_dict: Dict[str, Any], target_class: type) -> Any:
            values: Dict[str, Any] = {}
            for field_name, field_info in target_class.__dataclass_fields__.items():
                if field_name not in data_dict:
                    continue
                value = data_dict[field_name]
                if hasattr(field_info.type, "__dataclass_fields__"):
                    value = _dict_to_dataclass(value, field_info.type)
                values[field_name] = value
            return target_class(**values)

        try:
            return _dict_to_dataclass(data, cls)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def default(cls) -> "ParserConfig":
        """Strict UTF-8 decoding, warnings and above logged."""
        return cls(name="default")

    @classmethod
    def lenient_decoding(cls) -> "ParserConfig":
        """Replace undecodable bytes instead of failing the parse."""
        return cls(
            stream=StreamConfig(errors="replace"),
            name="lenient_decoding",
            description="Undecodable bytes become U+FFFD instead of raising",
        )
