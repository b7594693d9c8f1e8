"""
Users module.

Credential store: PIN hashing, signup, first-PIN, login verification and
legacy 4-digit PIN upgrades.

Public API:
- ICredentialService: Interface for credential operations
- User, UserSummary, PhoneState: Data models
- Users exceptions
"""

from .interfaces import ICredentialService, IUserRepository, IIdentityLinker
from .models import User, UserSummary, PhoneState
from .exceptions import (
    PhoneAlreadyRegisteredError,
    InvalidPhoneError,
    InvalidPinFormatError,
    UserNotFoundError,
)

__all__ = [
    # Interfaces
    "ICredentialService",
    "IUserRepository",
    "IIdentityLinker",
    # Models
    "User",
    "UserSummary",
    "PhoneState",
    # Exceptions
    "PhoneAlreadyRegisteredError",
    "InvalidPhoneError",
    "InvalidPinFormatError",
    "UserNotFoundError",
]
