"""
Rate limiting module.

Public API:
- IRateLimiter: Interface for limiter checks
- RateLimitResult, RateLimitBucket: Data models
"""

from .interfaces import IRateLimiter
from .models import RateLimitBucket, RateLimitResult

__all__ = [
    "IRateLimiter",
    "RateLimitBucket",
    "RateLimitResult",
]
