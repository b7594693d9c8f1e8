"""
Models shared by route handlers across modules.
"""

from pydantic import BaseModel, ConfigDict, Field


class AuthenticatedUser(BaseModel):
    """
    The caller behind a valid session.

    Built by the auth middleware from the session subject and a user lookup.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., description="User ID (UUID)")
    phone: str = Field(..., description="Canonical digits-only phone")
    display_name: str
