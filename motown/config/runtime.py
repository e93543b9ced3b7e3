"""
Interpreter version check.

The required Python version is declared once, in the package metadata
(``python_requires`` in setup.py), and checked here before anything else
is loaded.
"""

import logging
import platform
from importlib import metadata
from typing import Optional

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion

from .errors import RuntimeVersionError

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "motown"


def required_python_version(distribution: str = DISTRIBUTION_NAME) -> str:
    """
    Read the ``Requires-Python`` constraint from installed package metadata.

    Raises:
        metadata.PackageNotFoundError: If the distribution is not installed
        LookupError: If the metadata declares no constraint
    """
    requires = metadata.metadata(distribution).get("Requires-Python")
    if not requires:
        raise LookupError(f"{distribution} does not declare Requires-Python")
    return requires


def check_runtime_version(required: Optional[str] = None, actual: Optional[str] = None) -> str:
    """
    Verify the running interpreter satisfies the required version range.

    Args:
        required: Version specifier (e.g. ``">=3.9"``); read from package metadata when omitted
        actual: Version to check; defaults to the running interpreter's

    Returns:
        The constraint that was satisfied

    Raises:
        RuntimeVersionError: On mismatch, or if the constraint cannot be read or parsed
    """
    actual = actual or platform.python_version()
    constraint = required or "unknown"
    try:
        if required is None:
            constraint = required_python_version()
        satisfied = SpecifierSet(constraint).contains(actual, prereleases=True)
    except (metadata.PackageNotFoundError, LookupError, InvalidSpecifier, InvalidVersion) as e:
        raise RuntimeVersionError(
            f"update python! version {actual} is not {constraint} ({e})"
        ) from e

    if not satisfied:
        raise RuntimeVersionError(f"update python! version {actual} is not {constraint}")

    logger.debug(f"Python {actual} satisfies {constraint}")
    return constraint
