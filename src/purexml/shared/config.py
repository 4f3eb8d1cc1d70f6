"""Configuration objects for purexml.

Configuration is immutable: ``ParserConfig`` is a frozen dataclass validated
on construction, and changes go through ``override`` which returns a new
instance.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional

# No nesting limit unless one is configured
DEFAULT_MAX_DEPTH: Optional[int] = None


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
    """Settings for a parse call.

    Attributes:
        max_depth: Maximum element nesting depth, ``None`` disables the check
        allow_trailing_content: Ignore text after the root element when true
        correlation_id: Correlation ID attached to log records
    """

    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    allow_trailing_content: bool = True
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise ConfigValidationError(
                    "max_depth must be an integer or None", field_name="max_depth"
                )
            if self.max_depth < 1:
                raise ConfigValidationError(
                    "max_depth must be >= 1",
                    field_name="max_depth",
                    suggestions=["Use None to disable the depth check"],
                )
        if not isinstance(self.allow_trailing_content, bool):
            raise ConfigValidationError(
                "allow_trailing_content must be a boolean",
                field_name="allow_trailing_content",
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> ParserConfig().override(max_depth=64).max_depth
            64
        """
        unknown = set(kwargs) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(sorted(unknown))}",
                field_name=sorted(unknown)[0],
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Args:
            data: Mapping of field names to values

        Returns:
            ParserConfig instance created from dictionary

        Raises:
            ConfigValidationError: If ``data`` holds unknown keys or bad values
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be a mapping")
        return cls().override(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def strict(cls) -> "ParserConfig":
        """Reject anything but whitespace after the root element."""
        return cls(allow_trailing_content=False)

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Ignore trailing content and allow any nesting depth."""
        return cls(max_depth=None, allow_trailing_content=True)
