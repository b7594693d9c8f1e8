"""
Users module data models.

A User is identified by a canonical phone. The PIN hash travels with the
model inside the backend but is never serialized into API responses.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class User(BaseModel):
    """A registered (or pin-less legacy) user."""

    id: str = Field(..., description="User ID (UUID)")
    phone: str = Field(..., description="Canonical digits-only phone")
    display_name: str = Field(..., description="Display name")
    pin_hash: Optional[str] = Field(None, exclude=True, repr=False)
    created_at: datetime = Field(..., description="Account creation time")

    @property
    def has_pin(self) -> bool:
        return self.pin_hash is not None


class UserSummary(BaseModel):
    """Minimal user reference embedded in other resources for display."""

    id: str
    display_name: str


class PhoneState(BaseModel):
    """Internal routing state for a phone; never returned verbatim to callers."""

    exists: bool = False
    has_pin: bool = False
