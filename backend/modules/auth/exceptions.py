"""
Authentication module exceptions.

These exceptions are raised by the auth module and converted to HTTP
responses by the API error handlers.
"""

from shared.exceptions import AuthenticationError


class InvalidCredentialsError(AuthenticationError):
    """
    Raised for any failed phone + PIN check.

    The message is identical whether the phone exists or not.
    """

    def __init__(self):
        super().__init__("Invalid phone or PIN", code="INVALID_CREDENTIALS")


class IncorrectPinError(AuthenticationError):
    """Raised when the current PIN does not match during an upgrade."""

    def __init__(self):
        super().__init__("Current PIN is incorrect", code="INCORRECT_PIN")


class MissingTokenError(AuthenticationError):
    """Raised when no session token is provided."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidSessionError(AuthenticationError):
    """Raised when a session token is invalid, expired, or names no user."""

    def __init__(self, message: str = "Invalid or expired session"):
        super().__init__(message, code="INVALID_SESSION")
