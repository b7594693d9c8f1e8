"""
Rate limiting data models.
"""

from enum import Enum
from pydantic import BaseModel, Field


class RateLimitBucket(str, Enum):
    """Independent limiter buckets, each with its own key prefix."""

    PHONE_CHECK = "iou:phone-check"  # generous, enumeration protection
    AUTH_ATTEMPT = "iou:pin-attempt"  # strict, PIN brute-force protection
    API = "iou:api"                   # per authenticated user


class RateLimitResult(BaseModel):
    """Outcome of a single limiter check."""

    allowed: bool = Field(..., description="Whether the request may proceed")
    remaining: int = Field(..., description="Requests left in the current window")
    reset_at_ms: int = Field(..., description="Epoch milliseconds when the window frees up")
