"""
Process-wide configuration.

This module runs the startup sequence (interpreter check, then the
schema-driven loader) and keeps the resulting immutable configuration
for components that cannot have it passed in explicitly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigError
from .loader import ConfigLoader
from .runtime import check_runtime_version
from .schema import ConfigSchema

logger = logging.getLogger(__name__)

# Module-level singleton instance
_CONFIG: Optional[ConfigSchema] = None


def load_configuration(
    root: Optional[Union[str, Path]] = None,
    check_runtime: bool = True,
    required_python: Optional[str] = None,
) -> ConfigSchema:
    """
    Run the startup configuration sequence and publish the result.

    Args:
        root: Application root directory holding ``config/``
        check_runtime: Verify the interpreter version before loading
        required_python: Version constraint to check instead of the package metadata

    Returns:
        The validated, frozen configuration

    Raises:
        RuntimeVersionError: If the interpreter is not supported
        ConfigError: If any configuration source is missing, malformed, or invalid
    """
    global _CONFIG

    root_dir = ConfigLoader.resolve_root(root)
    if check_runtime:
        check_runtime_version(required=required_python)

    config = ConfigLoader.load(schema=ConfigSchema, root=root_dir)
    _CONFIG = config
    logger.debug(f"Configuration published: {config.mask()}")
    return config


def current() -> ConfigSchema:
    """
    Return the globally-initialized configuration.

    Raises:
        ConfigError: If load_configuration() has not been called yet
    """
    if _CONFIG is None:
        raise ConfigError("Configuration not initialized. Call load_configuration() first.")
    return _CONFIG


def reset() -> None:
    """Forget the published configuration (used by tests)."""
    global _CONFIG
    _CONFIG = None
