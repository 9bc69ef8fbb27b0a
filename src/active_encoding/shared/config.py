"""Configuration classes for active document encoding tracking.

This module provides configuration objects for the workspace defaults, the
byte-level detector and global settings such as logging.
"""

import codecs
import json
import os
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

VALID_LINE_SEPARATORS = ["CRLF", "CR", "LF"]


def _platform_line_separator() -> str:
    return {"\r\n": "CRLF", "\r": "CR"}.get(os.linesep, "LF")


@dataclass
class WorkspaceConfig:
    """Workspace-wide fallback encoding and line separator."""

    default_encoding: Optional[str] = "UTF-8"
    line_separator: str = field(default_factory=_platform_line_separator)

    def __post_init__(self) -> None:
        """Validate workspace configuration."""
        if self.default_encoding is not None:
            try:
                codecs.lookup(self.default_encoding)
            except LookupError as e:
                raise ValueError(
                    f"default_encoding is not a known charset: {self.default_encoding}"
                ) from e
        if self.line_separator not in VALID_LINE_SEPARATORS:
            raise ValueError(f"line_separator must be one of {VALID_LINE_SEPARATORS}")


@dataclass
class DetectionConfig:
    """Configuration for byte-level encoding detection."""

    enable_detection: bool = True
    sample_size: int = 8192
    detect_bom: bool = True
    enable_statistical: bool = True
    confidence_threshold: float = 0.7

    def __post_init__(self) -> None:
        """Validate detection configuration."""
        if self.sample_size <= 0:
            raise ValueError("sample_size must be > 0")
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError("confidence_threshold must be between 0.0 and 1.0")


@dataclass
class GlobalConfig:
    """Global configuration settings that apply across all components."""

    logging_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging_level not in valid_levels:
            raise ValueError(f"logging_level must be one of {valid_levels}")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


COMPONENTS = ["workspace", "detection", "global_"]


@dataclass(frozen=True)
class AgentConfig:
    """Configuration for the active document agent and its documents.

    Immutable; use :meth:`override` to derive a changed copy.
    """

    workspace: WorkspaceConfig = field(default_factory=WorkspaceConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    version: str = "1.0.0"
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        try:
            self.workspace.__post_init__()
            self.detection.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "AgentConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Keyword arguments for configuration fields to override

        Returns:
            New AgentConfig instance with overrides applied

        Example:
            >>> config = AgentConfig()
            >>> new_config = config.override(
            ...     workspace__default_encoding="ISO-8859-1",
            ...     detection__enable_detection=False
            ... )
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            # Match the component prefix, "global___x" belongs to "global_"
            component = next((c for c in COMPONENTS if key.startswith(c + "__")), None)
            if component is not None:
                nested_overrides.setdefault(component, {})[key[len(component) + 2:]] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for field_name in COMPONENTS:
            current_config = getattr(self, field_name)
            if field_name in nested_overrides:
                try:
                    new_fields[field_name] = replace(
                        current_config, **nested_overrides[field_name]
                    )
                except ValueError as e:
                    raise ConfigValidationError(str(e), field_name=field_name) from e
            else:
                new_fields[field_name] = current_config

        for key, value in nested_overrides.items():
            if key not in COMPONENTS:
                new_fields[key] = value

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            if isinstance(obj, (list, tuple, set)):
                return [_dataclass_to_dict(item) for item in obj]
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgentConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files surface.

        Args:
            data: Dictionary containing configuration data

        Returns:
            AgentConfig instance created from dictionary
        """
        component_types = {
            "workspace": WorkspaceConfig,
            "detection": DetectionConfig,
            "global_": GlobalConfig,
        }

        field_values: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in cls.__dataclass_fields__:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}", field_name=key
                )
            component_type = component_types.get(key)
            if component_type is None:
                field_values[key] = value
                continue
            unknown = set(value) - set(component_type.__dataclass_fields__)
            if unknown:
                raise ConfigValidationError(
                    f"Unknown {key} fields: {sorted(unknown)}", field_name=key
                )
            try:
                field_values[key] = component_type(**value)
            except ValueError as e:
                raise ConfigValidationError(str(e), field_name=key) from e

        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "AgentConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Path) -> "AgentConfig":
        """Load configuration from a JSON file."""
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read configuration file {path}: {e}") from e
        return cls.from_json(text)
