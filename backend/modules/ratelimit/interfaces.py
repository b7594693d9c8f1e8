"""
Rate limiting interface.
"""

from typing import Protocol, runtime_checkable

from .models import RateLimitResult


@runtime_checkable
class IRateLimiter(Protocol):
    """
    Interface for rate limit checks.

    Phone-keyed checks run before the caller is authenticated, so they are
    keyed by normalized phone rather than by caller identity.
    """

    async def check_phone_check(self, phone: str) -> RateLimitResult: ...

    async def check_auth_attempt(self, phone: str) -> RateLimitResult: ...

    async def check_api(self, user_id: str) -> RateLimitResult: ...

    async def enforce(self, result: RateLimitResult) -> None:
        """
        Raise if a check was rejected.

        Raises:
            RateLimitError: With a retry-after derived from the window reset
        """
        ...
