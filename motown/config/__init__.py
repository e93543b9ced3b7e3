"""
Configuration management for MoTown.

This module provides the startup configuration sequence: a declarative
Pydantic schema, JSON-with-comments config files overlaid per
environment, environment-variable overrides, and Cloud Foundry service
bindings.
"""

from .errors import (
    ConfigError,
    ConfigFileError,
    ConfigValidationError,
    PlatformOverlayError,
    RuntimeVersionError,
)
from .schema import ConfigSchema
from .loader import ConfigLoader
from .env import load_configuration, current, reset

__all__ = [
    "ConfigError",
    "ConfigFileError",
    "ConfigValidationError",
    "PlatformOverlayError",
    "RuntimeVersionError",
    "ConfigSchema",
    "ConfigLoader",
    "load_configuration",
    "current",
    "reset",
]
