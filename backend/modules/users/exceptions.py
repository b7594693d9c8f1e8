"""
Users module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class PhoneAlreadyRegisteredError(ConflictError):
    """Raised when signing up with a phone that already has an account."""

    def __init__(self):
        super().__init__(
            "An account already exists for this phone",
            code="PHONE_ALREADY_REGISTERED",
        )


class InvalidPhoneError(ValidationError):
    """Raised when a phone number has no usable digits."""

    def __init__(self):
        super().__init__("A valid phone number is required", code="INVALID_PHONE")


class InvalidPinFormatError(ValidationError):
    """Raised when a new PIN is not exactly six digits."""

    def __init__(self, message: str = "PIN must be 6 digits"):
        super().__init__(message, code="INVALID_PIN_FORMAT")


class UserNotFoundError(NotFoundError):
    """Raised when a user ID does not resolve to a user."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )
