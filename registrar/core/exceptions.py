"""
Custom exceptions for the registrar.
"""

from typing import Any, Dict, List, Optional, Tuple


class RegistrarException(Exception):
    """Base exception for all registrar errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class NotFoundError(RegistrarException):
    """Raised when a referenced id does not resolve in the registry."""
    pass


class DuplicateIdError(RegistrarException):
    """Raised when registering an entity whose id is already taken."""
    pass


class ValidationError(RegistrarException):
    """Raised when data validation fails."""
    pass


class OutOfRangeError(ValidationError):
    """Raised when a score falls outside [0, 100]."""
    pass


class UnknownGradeLevelError(ValidationError):
    """Raised when a roster names a grade level that does not exist."""
    pass


class CapacityExceededError(RegistrarException):
    """Raised by a course that has no seat left."""
    pass


class MalformedRecordError(RegistrarException):
    """Raised for a roster line that cannot be turned into a record."""

    def __init__(self, message: str, line_number: int, line: str, **kwargs):
        super().__init__(message, **kwargs)
        self.line_number = line_number
        self.line = line


class NotifyError(RegistrarException):
    """Raised once after a notification in which one or more observers failed."""

    def __init__(self, failures: List[Tuple[Any, BaseException]]):
        names = ", ".join(f"{observer!r}: {exc}" for observer, exc in failures)
        super().__init__(
            f"{len(failures)} observer(s) failed: {names}",
            error_code="notify_failed",
        )
        self.failures = list(failures)


class ConfigurationError(RegistrarException):
    """Raised when configuration is invalid."""
    pass
