"""Shared exceptions for jdcheck.

Verification itself never raises for malformed input; these cover the
surrounding layers (configuration, source loading, pluggable resolvers).
"""

from __future__ import annotations


class JdcheckError(Exception):
    """Base exception for jdcheck operations."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class ConfigError(JdcheckError):
    """Raised when a configuration file cannot be read or is invalid."""


class SourceParseError(JdcheckError):
    """Raised when a Java source file cannot be read."""


class ResolutionError(JdcheckError):
    """Raised by an exception resolver that cannot look up a class.

    The verification engine treats this as "unknown class" and falls back
    to comparing names.
    """
