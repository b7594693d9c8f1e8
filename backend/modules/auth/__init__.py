"""
Authentication module.

Handles session tokens and the phone + PIN login flow.

Public API:
- ISessionService: Interface for session operations
- SessionPayload, AuthResponse, UserProfile: Data models
- Auth exceptions: InvalidCredentialsError, InvalidSessionError, etc.
"""

from .interfaces import ISessionService
from .models import SessionPayload, AuthResponse, UserProfile
from .exceptions import (
    InvalidCredentialsError,
    IncorrectPinError,
    MissingTokenError,
    InvalidSessionError,
)

__all__ = [
    # Interface
    "ISessionService",
    # Models
    "SessionPayload",
    "AuthResponse",
    "UserProfile",
    # Exceptions
    "InvalidCredentialsError",
    "IncorrectPinError",
    "MissingTokenError",
    "InvalidSessionError",
]
