"""
Configuration error types.

Library code raises these; only the process entry point turns them into
diagnostics and exit codes.
"""

from typing import List, Optional, Sequence, Tuple


class ConfigError(Exception):
    """Raised when configuration cannot be loaded."""
    pass


class RuntimeVersionError(ConfigError):
    """Raised when the running interpreter does not satisfy the declared requirement."""
    pass


class ConfigFileError(ConfigError):
    """Raised when a configuration file is missing or cannot be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ConfigValidationError(ConfigError):
    """
    Raised when the merged configuration violates the schema.

    Attributes:
        errors: ``(dotted_path, message)`` pairs, one per violated constraint
        sources: The files and overlays that produced the rejected values
    """

    def __init__(self, errors: Sequence[Tuple[str, str]], sources: Optional[Sequence[str]] = None):
        self.errors: List[Tuple[str, str]] = list(errors)
        self.sources: List[str] = list(sources or [])
        super().__init__(self._format())

    def _format(self) -> str:
        header = "Configuration validation failed"
        if self.sources:
            header += f" (loaded from: {', '.join(self.sources)})"
        return header + ":\n" + "\n".join(f"  - {path}: {msg}" for path, msg in self.errors)


class PlatformOverlayError(ConfigError):
    """Raised when VCAP_SERVICES is malformed or lacks the expected service binding."""
    pass
