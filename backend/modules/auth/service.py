"""
Session service implementation.

Issues and verifies HS256-signed session tokens embedding the user ID and
an expiration.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from shared.config import get_settings

from .interfaces import ISessionService
from .models import SessionPayload

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class SessionService(ISessionService):
    """Stateless signed-token sessions."""

    def __init__(self, secret: str, ttl_days: int = 30):
        if not secret:
            raise RuntimeError(
                "Session configuration missing. Set the SESSION_SECRET environment variable."
            )
        self._secret = secret
        self._ttl = timedelta(days=ttl_days)

    def issue(self, user_id: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: Optional[str]) -> Optional[str]:
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["sub", "exp", "iat"]},
            )
            return SessionPayload(**payload).sub
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired session token")
            return None
        except (jwt.InvalidTokenError, ValueError):
            logger.debug("Rejected invalid session token")
            return None


# Module-level instance getter
_service_instance: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get the session service singleton."""
    global _service_instance
    if _service_instance is None:
        settings = get_settings()
        _service_instance = SessionService(settings.session_secret, settings.session_ttl_days)
    return _service_instance


def reset_session_service() -> None:
    """Reset the session service singleton (for testing)."""
    global _service_instance
    _service_instance = None
