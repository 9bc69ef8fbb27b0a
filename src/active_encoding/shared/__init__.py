"""Shared utilities for active document encoding tracking.

This module provides configuration objects, result types and logging helpers
used across the character, resolution and document layers.
"""

from .config import (
    AgentConfig,
    ConfigError,
    ConfigValidationError,
    DetectionConfig,
    GlobalConfig,
    WorkspaceConfig,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    MessageKind,
    PersistOutcome,
)

__all__ = [
    "AgentConfig",
    "ConfigError",
    "ConfigValidationError",
    "DetectionConfig",
    "GlobalConfig",
    "WorkspaceConfig",
    "CorrelationLogger",
    "get_logger",
    "MessageKind",
    "PersistOutcome",
]
