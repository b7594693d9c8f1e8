"""
Credential service implementation.

Owns the per-user credential state machine:

    NoAccount --signup--> HasPin(6)
    AccountNoPin --set_pin--> HasPin(6)
    HasPin(4) --verify + upgrade_pin--> HasPin(6)

Raw PINs are never stored or logged.
"""

import logging
from typing import Optional

from shared.phone import normalize_phone, mask_phone

from .exceptions import InvalidPhoneError, InvalidPinFormatError, PhoneAlreadyRegisteredError
from .interfaces import ICredentialService, IUserRepository, IIdentityLinker
from .models import User, PhoneState
from .pins import hash_pin, verify_pin, is_valid_new_pin, is_acceptable_pin

logger = logging.getLogger(__name__)


class CredentialService(ICredentialService):
    """
    Credential store backed by a user repository.

    After every successful signup, first PIN, and login, IOUs that were
    addressed to the user's phone before they registered are linked to them.
    """

    def __init__(
        self,
        repository: IUserRepository,
        linker: Optional[IIdentityLinker] = None,
    ):
        self._repo = repository
        self._linker = linker

    async def check_phone_state(self, phone: str) -> PhoneState:
        normalized = normalize_phone(phone)
        if normalized is None:
            return PhoneState()

        user = self._repo.get_by_phone(normalized)
        if user is None:
            return PhoneState()
        return PhoneState(exists=True, has_pin=user.has_pin)

    async def create_user(self, phone: str, display_name: str, pin: str) -> User:
        normalized = normalize_phone(phone)
        if normalized is None:
            raise InvalidPhoneError()
        if not is_valid_new_pin(pin):
            raise InvalidPinFormatError()

        if self._repo.get_by_phone(normalized) is not None:
            raise PhoneAlreadyRegisteredError()

        user = self._repo.create(normalized, display_name.strip(), hash_pin(pin))
        logger.info("Created user %s for phone %s", user.id, mask_phone(normalized))

        await self._link(user)
        return user

    async def set_pin(
        self, phone: str, pin: str, display_name: Optional[str] = None
    ) -> Optional[User]:
        if not is_valid_new_pin(pin):
            raise InvalidPinFormatError()

        normalized = normalize_phone(phone)
        if normalized is None:
            return None

        name = display_name.strip() if display_name else None
        user = self._repo.set_pin_hash_if_absent(normalized, hash_pin(pin), name)
        if user is None:
            return None

        logger.info("Set first PIN for user %s", user.id)
        await self._link(user)
        return user

    async def verify(self, phone: str, pin: str) -> Optional[User]:
        normalized = normalize_phone(phone)
        if normalized is None or not is_acceptable_pin(pin):
            return None

        user = self._repo.get_by_phone(normalized)
        if user is None or user.pin_hash is None:
            return None

        if not verify_pin(pin, user.pin_hash):
            logger.info("PIN mismatch for phone %s", mask_phone(normalized))
            return None

        await self._link(user)
        return user

    async def upgrade_pin(self, user_id: str, current_pin: str, new_pin: str) -> bool:
        if not is_valid_new_pin(new_pin):
            raise InvalidPinFormatError("New PIN must be 6 digits")

        user = self._repo.get_by_id(user_id)
        if user is None or user.pin_hash is None:
            return False
        if not is_acceptable_pin(current_pin) or not verify_pin(current_pin, user.pin_hash):
            return False

        self._repo.update_pin_hash(user_id, hash_pin(new_pin))
        logger.info("Upgraded PIN for user %s", user_id)
        return True

    async def get_user(self, user_id: str) -> Optional[User]:
        return self._repo.get_by_id(user_id)

    async def _link(self, user: User) -> None:
        if self._linker is None:
            return
        linked = await self._linker.link_by_phone(user.phone, user.id)
        if linked:
            logger.info("Linked %d IOU(s) to user %s", linked, user.id)
