"""IndexNode Core Exceptions - Core exception classes for error handling.

This module contains the exception hierarchy for parameter resolution. Every
error raised while loading or resolving configuration is a ConfigurationError,
and each subclass names the kind of failure so the process entry point can
report the failing key or file precisely.
"""

from typing import Optional, Any, Dict


class IndexNodeError(Exception):
    """Base exception for all index node errors.

    This is the root exception class that all other index node exceptions
    inherit from. It provides common functionality for error handling,
    context tracking, and debugging.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize index node error.

        Args:
            message: Human-readable error description
            context: Optional dictionary with error context (e.g., keys, file paths)
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        """Return formatted error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message

    def add_context(self, key: str, value: Any) -> "IndexNodeError":
        """Add context information to the error."""
        self.context[key] = value
        return self


class ConfigurationError(IndexNodeError):
    """Raised when configuration is invalid or cannot be resolved.

    Configuration errors are fatal: the service cannot run with unknown or
    malformed core configuration.
    """

    kind = "configuration"


class SourceUnavailableError(ConfigurationError):
    """Raised when a YAML source is missing, unreadable, or malformed."""

    kind = "source-unavailable"

    def __init__(
        self,
        path: str,
        reason: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize source error.

        Args:
            path: Path of the configuration file that failed to load
            reason: Description of what went wrong
            context: Optional additional context
            cause: Optional underlying exception
        """
        message = f"Cannot load config file '{path}': {reason}"
        super().__init__(message, context, cause)
        self.path = path
        self.reason = reason


class KeyMissingError(ConfigurationError):
    """Raised when a required key has no value in any layer."""

    kind = "key-missing"

    def __init__(self, key: str, context: Optional[Dict[str, Any]] = None):
        """Initialize missing key error.

        Args:
            key: Dotted key that was looked up
            context: Optional additional context
        """
        message = f"Config key not found: '{key}'"
        super().__init__(message, context)
        self.key = key


class TypeCoercionError(ConfigurationError):
    """Raised when a value exists but cannot be parsed into its target type."""

    kind = "type-coercion"

    def __init__(
        self,
        key: str,
        value: Any,
        target: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize coercion error.

        Args:
            key: Dotted key whose value failed to parse
            value: The raw value
            target: Name of the target type (e.g., "bool", "int")
            context: Optional additional context
            cause: Optional underlying exception
        """
        message = f"Cannot parse config key '{key}' value {value!r} as {target}"
        super().__init__(message, context, cause)
        self.key = key
        self.value = value
        self.target = target
