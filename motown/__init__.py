#!/usr/bin/env python3
"""
MoTown Package

Startup configuration for the MoTown server: a typed schema, per-environment
JSON-with-comments config files, environment-variable overrides, and Cloud
Foundry service bindings, validated once at process start.
"""

__version__ = "1.0.0"
__author__ = "MoTown"
__description__ = "Startup configuration loader for the MoTown server"
__license__ = "MPL-2.0"

# Import configuration for public API
from .config import (
    ConfigError,
    ConfigFileError,
    ConfigValidationError,
    PlatformOverlayError,
    RuntimeVersionError,
    ConfigSchema,
    ConfigLoader,
    load_configuration,
    current,
)

# Import constants for public API
from .constants import (
    EXIT_SUCCESS,
    EXIT_RUNTIME_ERROR,
    EXIT_CONFIG_ERROR,
    EXIT_INTERRUPTED,
    EXIT_UNEXPECTED_ERROR,
)

# Import CLI functionality for public API
from .cli import (
    main,
    create_argument_parser,
)

# Import utilities for public API
from .utils import (
    setup_logging,
    apply_log_level,
)

# Public API exports
__all__ = [
    # Package metadata
    "__version__",
    "__author__",
    "__description__",
    # Configuration
    "ConfigError",
    "ConfigFileError",
    "ConfigValidationError",
    "PlatformOverlayError",
    "RuntimeVersionError",
    "ConfigSchema",
    "ConfigLoader",
    "load_configuration",
    "current",
    # Constants
    "EXIT_SUCCESS",
    "EXIT_RUNTIME_ERROR",
    "EXIT_CONFIG_ERROR",
    "EXIT_INTERRUPTED",
    "EXIT_UNEXPECTED_ERROR",
    # CLI functions
    "main",
    "create_argument_parser",
    # Utilities
    "setup_logging",
    "apply_log_level",
]
