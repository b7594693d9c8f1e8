"""
Authentication module data models.

Request/response shapes for the phone + PIN login flow and the decoded
session token payload.
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field


class SessionPayload(BaseModel):
    """Decoded session token payload."""

    sub: str = Field(..., description="Subject (user ID)")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")


class UserProfile(BaseModel):
    """Public view of a user."""

    id: str
    phone: str
    display_name: str
    created_at: datetime


class CheckPhoneRequest(BaseModel):
    phone: str = Field(..., min_length=1, max_length=32)


class CheckPhoneResponse(BaseModel):
    """
    Where to route the login flow.

    "signup" covers both "no account" and "account without a PIN", so the
    response does not reveal which of the two applies.
    """

    action: Literal["signup", "login"]
    needs_pin: bool


class SignupRequest(BaseModel):
    phone: str = Field(..., min_length=1, max_length=32)
    display_name: str = Field(..., min_length=1, max_length=100)
    pin: str = Field(..., min_length=1, max_length=16)


class LoginRequest(BaseModel):
    phone: str = Field(..., min_length=1, max_length=32)
    pin: str = Field(..., min_length=1, max_length=16)


class SetPinRequest(BaseModel):
    phone: str = Field(..., min_length=1, max_length=32)
    pin: str = Field(..., min_length=1, max_length=16)


class UpgradePinRequest(BaseModel):
    current_pin: str = Field(..., min_length=1, max_length=16)
    new_pin: str = Field(..., min_length=1, max_length=16)


class AuthResponse(BaseModel):
    """Returned after signup, login, or first PIN."""

    user: UserProfile
    token: str = Field(..., description="Session token (also set as a cookie)")
    needs_pin_upgrade: bool = Field(
        default=False,
        description="True when a legacy 4-digit PIN was used to log in",
    )


class MeResponse(BaseModel):
    user: Optional[UserProfile] = None


class SuccessResponse(BaseModel):
    success: bool = True
