"""
Base exception classes for the IOU backend.

Each module defines its own exceptions that inherit from these bases.
The API layer maps each base class to an HTTP status in one place.
"""

from typing import Optional, Any


class IOUError(Exception):
    """
    Base exception for all IOU backend errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(IOUError):
    """Resource not found."""

    pass


class ValidationError(IOUError):
    """Input validation failed."""

    pass


class AuthenticationError(IOUError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(IOUError):
    """Authenticated, but not allowed to act on this resource."""

    pass


class ConflictError(IOUError):
    """Uniqueness or state-transition conflict."""

    pass


class InvalidOperationError(IOUError):
    """The resource exists but the requested operation is not allowed on it."""

    pass


class RateLimitError(IOUError):
    """Too many attempts for a rate-limited key."""

    def __init__(
        self,
        retry_after_seconds: int,
        message: Optional[str] = None,
        code: Optional[str] = None,
    ):
        retry_after_seconds = max(retry_after_seconds, 1)
        if message is None:
            minutes = -(-retry_after_seconds // 60)
            unit = "minute" if minutes == 1 else "minutes"
            message = f"Too many attempts. Please try again in {minutes} {unit}."
        super().__init__(
            message,
            code=code or "RATE_LIMITED",
            details={"retry_after_seconds": retry_after_seconds},
        )
        self.retry_after_seconds = retry_after_seconds


class ExternalServiceError(IOUError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
