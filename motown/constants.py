#!/usr/bin/env python3
"""
Application Constants

This module contains the exit codes used by the MoTown entry point.
"""

# Exit codes for different failure modes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1  # Unsupported Python version
EXIT_CONFIG_ERROR = 3
EXIT_INTERRUPTED = 130  # Conventional exit code for Ctrl+C
EXIT_UNEXPECTED_ERROR = 10
