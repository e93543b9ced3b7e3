"""
Utilities module for MoTown.

This module provides shared utility functions:
- Logging utilities for consistent logging setup
"""

# Logging utilities
from .logging import setup_logging, apply_log_level

__all__ = [
    "setup_logging",
    "apply_log_level",
]
