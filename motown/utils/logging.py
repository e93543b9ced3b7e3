"""
Logging utilities for MoTown.

This module provides centralized logging configuration so that every
component logs with the same format, and maps the configured
``logger.level`` names onto standard logging levels.
"""

import logging

# "silent" sits above CRITICAL so nothing is emitted
SILENT = logging.CRITICAL + 10

LOG_LEVELS = {
    "silent": SILENT,
    "win": logging.ERROR,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "http": logging.INFO,
    "info": logging.INFO,
    "verbose": logging.DEBUG,
    "silly": logging.DEBUG,
}


def setup_logging(verbose: bool = False):
    """Setup logging configuration with appropriate level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    format_string = "%(asctime)s - %(levelname)s - %(message)s"

    logging.basicConfig(level=level, format=format_string, datefmt="%Y-%m-%d %H:%M:%S")


def apply_log_level(level_name: str) -> int:
    """
    Set the root logger to the level named in the configuration.

    Args:
        level_name: One of the ``logger.level`` names (e.g. "warn", "verbose")

    Returns:
        The numeric logging level applied

    Raises:
        ValueError: If the name is not a known level
    """
    try:
        level = LOG_LEVELS[level_name]
    except KeyError:
        raise ValueError(f"Unknown log level: {level_name}") from None

    logging.getLogger().setLevel(level)
    return level
