"""
Session authentication middleware.

Resolves the caller from the session cookie or a Bearer token and loads
the user record behind it.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import InvalidSessionError, MissingTokenError
from modules.auth.interfaces import ISessionService
from modules.users.interfaces import ICredentialService
from shared.config import get_settings
from shared.models import AuthenticatedUser

from ..dependencies import get_credential_service, get_session_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """
    Get the session token from the Authorization header, else the cookie.
    """
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(get_settings().session_cookie_name) or None


async def resolve_user(
    token: Optional[str],
    sessions: ISessionService,
    credentials: ICredentialService,
) -> Optional[AuthenticatedUser]:
    """
    Map a session token to the user it was issued for.

    Returns None for a missing, invalid, or expired token, and for a token
    whose user no longer exists.
    """
    if not token:
        return None

    user_id = sessions.verify(token)
    if user_id is None:
        return None

    user = await credentials.get_user(user_id)
    if user is None:
        return None

    return AuthenticatedUser(id=user.id, phone=user.phone, display_name=user.display_name)


async def get_current_user(
    request: Request,
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    sessions: ISessionService = Depends(get_session_service),
    credentials: ICredentialService = Depends(get_credential_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    token = extract_token(request, bearer)
    if token is None:
        raise MissingTokenError()

    user = await resolve_user(token, sessions, credentials)
    if user is None:
        raise InvalidSessionError()
    return user


async def get_optional_user(
    request: Request,
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    sessions: ISessionService = Depends(get_session_service),
    credentials: ICredentialService = Depends(get_credential_service),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.
    """
    return await resolve_user(extract_token(request, bearer), sessions, credentials)


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
