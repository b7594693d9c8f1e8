"""
Authentication API endpoints.

Phone + PIN signup/login, first-PIN for pin-less accounts, legacy PIN
upgrade, current-user lookup and logout. Credential endpoints are rate
limited per normalized phone before any PIN is checked.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_credential_service, get_rate_limiter, get_session_service
from api.middleware.auth import get_current_user, get_optional_user
from modules.ratelimit.interfaces import IRateLimiter
from modules.users.exceptions import InvalidPhoneError, PhoneAlreadyRegisteredError
from modules.users.interfaces import ICredentialService
from modules.users.models import User
from modules.users.pins import is_legacy_pin
from shared.config import get_settings
from shared.models import AuthenticatedUser
from shared.phone import normalize_phone, mask_phone

from .exceptions import IncorrectPinError, InvalidCredentialsError
from .interfaces import ISessionService
from .models import (
    AuthResponse,
    CheckPhoneRequest,
    CheckPhoneResponse,
    LoginRequest,
    MeResponse,
    SetPinRequest,
    SignupRequest,
    SuccessResponse,
    UpgradePinRequest,
    UserProfile,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_phone(raw: str) -> str:
    phone = normalize_phone(raw)
    if phone is None:
        raise InvalidPhoneError()
    return phone


def _profile(user: User) -> UserProfile:
    return UserProfile(
        id=user.id,
        phone=user.phone,
        display_name=user.display_name,
        created_at=user.created_at,
    )


def _start_session(
    response: Response,
    sessions: ISessionService,
    user: User,
    needs_pin_upgrade: bool = False,
) -> AuthResponse:
    settings = get_settings()
    token = sessions.issue(user.id)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )
    return AuthResponse(user=_profile(user), token=token, needs_pin_upgrade=needs_pin_upgrade)


@router.post("/check", response_model=CheckPhoneResponse)
async def check_phone(
    request: CheckPhoneRequest,
    credentials: ICredentialService = Depends(get_credential_service),
    limiter: IRateLimiter = Depends(get_rate_limiter),
) -> CheckPhoneResponse:
    """
    Decide whether the login flow should sign up or log in.
    """
    phone = _require_phone(request.phone)
    await limiter.enforce(await limiter.check_phone_check(phone))

    state = await credentials.check_phone_state(phone)
    if state.exists and state.has_pin:
        return CheckPhoneResponse(action="login", needs_pin=False)
    return CheckPhoneResponse(action="signup", needs_pin=True)


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(
    request: SignupRequest,
    response: Response,
    credentials: ICredentialService = Depends(get_credential_service),
    sessions: ISessionService = Depends(get_session_service),
    limiter: IRateLimiter = Depends(get_rate_limiter),
) -> AuthResponse:
    """
    Create an account with a 6-digit PIN.

    A pin-less account already holding this phone gets its first PIN and
    the submitted display name instead, so signup works the same for both
    cases.
    """
    phone = _require_phone(request.phone)
    await limiter.enforce(await limiter.check_auth_attempt(phone))

    state = await credentials.check_phone_state(phone)
    if state.exists and not state.has_pin:
        user = await credentials.set_pin(phone, request.pin, request.display_name)
        if user is None:
            raise PhoneAlreadyRegisteredError()
    else:
        user = await credentials.create_user(phone, request.display_name, request.pin)

    return _start_session(response, sessions, user)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    response: Response,
    credentials: ICredentialService = Depends(get_credential_service),
    sessions: ISessionService = Depends(get_session_service),
    limiter: IRateLimiter = Depends(get_rate_limiter),
) -> AuthResponse:
    """
    Log in with phone + PIN.

    Legacy 4-digit PINs still log in, flagged with needs_pin_upgrade.
    """
    phone = _require_phone(request.phone)
    await limiter.enforce(await limiter.check_auth_attempt(phone))

    user = await credentials.verify(phone, request.pin)
    if user is None:
        logger.info("Failed login for phone %s", mask_phone(phone))
        raise InvalidCredentialsError()

    return _start_session(response, sessions, user, needs_pin_upgrade=is_legacy_pin(request.pin))


@router.post("/set-pin", response_model=AuthResponse)
async def set_pin(
    request: SetPinRequest,
    response: Response,
    credentials: ICredentialService = Depends(get_credential_service),
    sessions: ISessionService = Depends(get_session_service),
    limiter: IRateLimiter = Depends(get_rate_limiter),
) -> AuthResponse:
    """
    Set the first PIN on an account that does not have one yet.
    """
    phone = _require_phone(request.phone)
    await limiter.enforce(await limiter.check_auth_attempt(phone))

    user = await credentials.set_pin(phone, request.pin)
    if user is None:
        raise InvalidCredentialsError()

    return _start_session(response, sessions, user)


@router.post("/upgrade-pin", response_model=SuccessResponse)
async def upgrade_pin(
    request: UpgradePinRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    credentials: ICredentialService = Depends(get_credential_service),
    limiter: IRateLimiter = Depends(get_rate_limiter),
) -> SuccessResponse:
    """
    Replace the caller's PIN with a new 6-digit PIN.
    """
    await limiter.enforce(await limiter.check_auth_attempt(user.phone))

    if not await credentials.upgrade_pin(user.id, request.current_pin, request.new_pin):
        raise IncorrectPinError()
    return SuccessResponse()


@router.get("/me", response_model=MeResponse)
async def me(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    credentials: ICredentialService = Depends(get_credential_service),
) -> MeResponse:
    """
    Get the current user, or null when not logged in.
    """
    if user is None:
        return MeResponse()

    record = await credentials.get_user(user.id)
    return MeResponse(user=_profile(record) if record else None)


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response) -> SuccessResponse:
    """
    Discard the session cookie.
    """
    response.delete_cookie(get_settings().session_cookie_name, path="/")
    return SuccessResponse()
