"""IndexNode Core Exceptions Package - Exception classes for error handling.

The hierarchy separates the three ways configuration resolution can fail:
- SourceUnavailableError: a YAML document is missing or malformed
- KeyMissingError: a required key has no value in any layer
- TypeCoercionError: a value cannot be parsed into its target type
"""

from .core import (
    ConfigurationError,
    IndexNodeError,
    KeyMissingError,
    SourceUnavailableError,
    TypeCoercionError,
)

__all__ = [
    # Base exception
    "IndexNodeError",

    # Configuration exceptions
    "ConfigurationError",
    "SourceUnavailableError",
    "KeyMissingError",
    "TypeCoercionError",
]
