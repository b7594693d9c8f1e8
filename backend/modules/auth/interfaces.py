"""
Authentication module interface.

Other modules should depend on ISessionService, not the concrete implementation.
"""

from typing import Protocol, Optional, runtime_checkable


@runtime_checkable
class ISessionService(Protocol):
    """
    Interface for session token operations.

    Tokens are stateless: there is no revocation list, so logging out only
    discards the client-held token.
    """

    def issue(self, user_id: str) -> str:
        """
        Issue a signed, time-limited token for a user.

        Args:
            user_id: ID of the authenticated user

        Returns:
            Encoded session token
        """
        ...

    def verify(self, token: Optional[str]) -> Optional[str]:
        """
        Verify a session token.

        Args:
            token: Encoded session token

        Returns:
            The user ID, or None on a bad signature, expiry, or malformed token.
            Never raises.
        """
        ...
