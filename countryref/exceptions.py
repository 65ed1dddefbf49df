"""Custom exception hierarchy for countryref.

Exception Hierarchy:
    CountryRefError (base)
    ├── ConfigurationError
    ├── ReferenceDataError
    └── InvalidArgumentError
        └── InvalidAttributeError

Lookups that simply find nothing are not errors: they come back as ``None``
in the result sequence. Only malformed requests raise.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Sequence


class CountryRefError(Exception):
    """Base exception for all countryref errors.

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for CLI/JSON output."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(CountryRefError):
    """Raised when settings point somewhere unusable.

    Examples:
        - COUNTRYREF_DATA_DIR is not a directory
    """
    pass


class ReferenceDataError(CountryRefError):
    """Raised when a reference table is missing or has the wrong shape.

    Attributes:
        path: File that failed to load
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.path = path
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, code, details)


class InvalidArgumentError(CountryRefError, ValueError):
    """Raised when a caller passes malformed input.

    Examples:
        - Non-string element in a batch of names or codes
        - Code that is not three characters where an ISO3 code is required
    """

    def __init__(
        self,
        message: str,
        argument: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.argument = argument
        details = details or {}
        if argument:
            details["argument"] = argument
        super().__init__(message, code, details)


class InvalidAttributeError(InvalidArgumentError):
    """Raised when an unknown attribute is requested from the code resolver."""

    def __init__(
        self,
        attribute: Any,
        allowed: Sequence[str],
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.attribute = attribute
        self.allowed = list(allowed)
        details = details or {}
        details["allowed"] = self.allowed
        message = (
            f"Invalid attribute {attribute!r}. Must be one of: "
            + ", ".join(f"'{name}'" for name in self.allowed)
        )
        super().__init__(message, argument="attribute", code=code, details=details)


def get_error_response(error: Exception) -> Dict[str, Any]:
    """Convert any exception to an error payload.

    Args:
        error: The exception to convert

    Returns:
        Dictionary suitable for printing as JSON
    """
    if isinstance(error, CountryRefError):
        return error.to_dict()

    return {
        "error": "InternalError",
        "message": str(error),
        "details": {},
    }
