"""
User repository for database access.

Encapsulates all Supabase queries and row mapping for the iou_users table.
"""

from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.repository import BaseRepository
from .exceptions import PhoneAlreadyRegisteredError
from .models import User

USERS_TABLE = "iou_users"

# Postgres unique_violation
_UNIQUE_VIOLATION = "23505"


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    Phones passed in must already be normalized. This repository does NOT
    hash or check PINs; it only stores what the credential service hands it.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        rows = self._rows_by_id(self._db.table(USERS_TABLE).select("*").eq("id", user_id))
        if not rows:
            return None
        return self._map_to_user(rows[0])

    def get_by_ids(self, user_ids: list[str]) -> list[User]:
        if not user_ids:
            return []
        result = self._db.table(USERS_TABLE).select("*").in_("id", user_ids).execute()
        return [self._map_to_user(row) for row in result.data]

    def get_by_phone(self, phone: str) -> Optional[User]:
        result = self._db.table(USERS_TABLE).select("*").eq("phone", phone).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_phones(self, phones: list[str]) -> list[User]:
        if not phones:
            return []
        result = self._db.table(USERS_TABLE).select("*").in_("phone", phones).execute()
        return [self._map_to_user(row) for row in result.data]

    def create(self, phone: str, display_name: str, pin_hash: Optional[str]) -> User:
        """
        Insert a new user.

        Raises:
            PhoneAlreadyRegisteredError: If the phone unique index rejects the row.
        """
        data = {
            "phone": phone,
            "display_name": display_name,
            "pin_hash": pin_hash,
        }
        try:
            result = self._db.table(USERS_TABLE).insert(data).execute()
        except APIError as e:
            if e.code == _UNIQUE_VIOLATION:
                raise PhoneAlreadyRegisteredError() from e
            raise
        return self._map_to_user(result.data[0])

    def set_pin_hash_if_absent(
        self, phone: str, pin_hash: str, display_name: Optional[str] = None
    ) -> Optional[User]:
        """
        Set the PIN hash on a pin-less account.

        The null guard is part of the UPDATE, so two concurrent first-PIN
        requests cannot both succeed.
        """
        data = {"pin_hash": pin_hash}
        if display_name:
            data["display_name"] = display_name
        result = (
            self._db.table(USERS_TABLE)
            .update(data)
            .eq("phone", phone)
            .is_("pin_hash", "null")
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def update_pin_hash(self, user_id: str, pin_hash: str) -> None:
        self._db.table(USERS_TABLE).update({"pin_hash": pin_hash}).eq("id", user_id).execute()

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=str(data["id"]),
            phone=data["phone"],
            display_name=data.get("display_name") or "",
            pin_hash=data.get("pin_hash"),
            created_at=data["created_at"],
        )
