"""
Shared infrastructure for the IOU backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- phone: Phone number canonicalization

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    IOUError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidOperationError,
    RateLimitError,
    ExternalServiceError,
)
from .models import AuthenticatedUser
from .phone import normalize_phone, mask_phone

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "IOUError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "InvalidOperationError",
    "RateLimitError",
    "ExternalServiceError",
    "AuthenticatedUser",
    "normalize_phone",
    "mask_phone",
]
