"""Custom exceptions for the mongoquery library.

All errors raised by the compilers and by the orchestration layer derive from
`MongoQueryError`, which carries a message plus keyword details.
"""

from typing import Any, Dict


class MongoQueryError(Exception):
    """Base exception for all mongoquery errors.

    Attributes:
        message: Error message
        details: Additional error context as key-value pairs
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        """Initialize exception with message and additional details.

        Args:
            message: Human-readable error message
            **kwargs: Additional context (e.g., operator, field, table)
        """
        self.message = message
        self.details: Dict[str, Any] = kwargs
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the complete error message with details."""
        if not self.details:
            return self.message

        details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        if self.message:
            return f"{self.message} ({details_str})"
        return details_str

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# Compilation exceptions
class QueryCompileError(MongoQueryError):
    """Raised when a query or expression cannot be compiled.

    Example:
        >>> raise QueryCompileError("Cannot compile query", field="name")
    """


class InvalidQueryError(QueryCompileError):
    """Raised when a query or expression has a shape the compiler cannot handle.

    Example:
        >>> raise InvalidQueryError("Aggregate requires a pipeline sink", operator="$sum")
    """


class UnsupportedFeatureError(QueryCompileError):
    """Raised when a query needs a backend capability that is disabled.

    Example:
        >>> raise UnsupportedFeatureError("Server-side functions are disabled", operator="$regexFor")
    """


# Validation exceptions
class ValidationError(MongoQueryError):
    """Raised when a write payload or argument fails validation."""


class InvalidFieldError(ValidationError):
    """Raised when a field has an invalid value or cannot be modified.

    Example:
        >>> raise InvalidFieldError("Cannot modify primary key", field="id", operation="set")
    """


# Configuration exceptions
class ConfigurationError(MongoQueryError):
    """Raised when configuration is invalid or missing."""


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid.

    Example:
        >>> raise InvalidConfigError("Invalid config value", config_key="AGGREGATE_NAME_LENGTH", value=0, expected=">0")
    """


# Driver exceptions
class DriverError(MongoQueryError):
    """Base exception for orchestration and driver errors."""


class UnknownTableError(DriverError):
    """Raised when a table name has not been declared with `Database.extend`.

    Example:
        >>> raise UnknownTableError("Unknown table name", table="user")
    """


class DriverNotConnectedError(DriverError):
    """Raised when an operation is dispatched before any driver is connected.

    Example:
        >>> raise DriverNotConnectedError("No driver connected", table="user")
    """
