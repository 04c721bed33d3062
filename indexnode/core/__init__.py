"""IndexNode Core Package - Configuration and exceptions.

Modules:
    config: Layered store, derivation rules and the parameter table
    exceptions: Exception classes for configuration errors
"""

from .exceptions import (
    ConfigurationError,
    IndexNodeError,
    KeyMissingError,
    SourceUnavailableError,
    TypeCoercionError,
)

__all__ = [
    "IndexNodeError",
    "ConfigurationError",
    "SourceUnavailableError",
    "KeyMissingError",
    "TypeCoercionError",
]
