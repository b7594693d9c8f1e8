"""
Users module interfaces.

The credential service depends on IUserRepository and an identity linker;
other modules depend on ICredentialService, not on the concrete classes.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import User, PhoneState


@runtime_checkable
class IUserRepository(Protocol):
    """Data access contract for the users table."""

    def get_by_id(self, user_id: str) -> Optional[User]: ...

    def get_by_ids(self, user_ids: list[str]) -> list[User]: ...

    def get_by_phone(self, phone: str) -> Optional[User]: ...

    def get_by_phones(self, phones: list[str]) -> list[User]: ...

    def create(self, phone: str, display_name: str, pin_hash: Optional[str]) -> User: ...

    def set_pin_hash_if_absent(
        self, phone: str, pin_hash: str, display_name: Optional[str] = None
    ) -> Optional[User]:
        """Set pin_hash (and optionally the name) only where pin_hash is null; None if no row matched."""
        ...

    def update_pin_hash(self, user_id: str, pin_hash: str) -> None: ...


@runtime_checkable
class IIdentityLinker(Protocol):
    """Attaches previously-unclaimed IOUs to a user by phone."""

    async def link_by_phone(self, phone: str, user_id: str) -> int: ...


@runtime_checkable
class ICredentialService(Protocol):
    """
    Interface for credential operations.

    Expected failures (wrong PIN, no such account) come back as None/False
    rather than exceptions; only malformed input raises.
    """

    async def check_phone_state(self, phone: str) -> PhoneState:
        """Read-only existence/PIN state for routing a login flow."""
        ...

    async def create_user(self, phone: str, display_name: str, pin: str) -> User:
        """
        Create a user with a 6-digit PIN and link IOUs addressed to the phone.

        Raises:
            PhoneAlreadyRegisteredError: If the normalized phone already exists
            InvalidPinFormatError: If the PIN is not exactly 6 digits
        """
        ...

    async def set_pin(
        self, phone: str, pin: str, display_name: Optional[str] = None
    ) -> Optional[User]:
        """Set a first PIN (and optionally rename) a pin-less account; None if not eligible."""
        ...

    async def verify(self, phone: str, pin: str) -> Optional[User]:
        """Verify a 4- or 6-digit PIN; None on any failure."""
        ...

    async def upgrade_pin(self, user_id: str, current_pin: str, new_pin: str) -> bool:
        """Replace the PIN after re-verifying the current one."""
        ...

    async def get_user(self, user_id: str) -> Optional[User]: ...
