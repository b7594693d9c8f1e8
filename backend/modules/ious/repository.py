"""
IOU repository for database access.

Encapsulates all Supabase queries and data mapping for:
- iou_ious
- iou_archives
"""

import secrets
from typing import Optional, Any

from modules.users.models import UserSummary
from shared.repository import BaseRepository
from .models import IOU, IOUStatus

IOUS_TABLE = "iou_ious"
ARCHIVES_TABLE = "iou_archives"

# Embeds both party references through their foreign keys.
IOU_SELECT = (
    "*, "
    "from_user:iou_users!iou_ious_from_user_id_fkey(id, display_name), "
    "to_user:iou_users!iou_ious_to_user_id_fkey(id, display_name)"
)


def generate_share_token() -> str:
    """Unguessable, URL-safe token for public share links."""
    return secrets.token_urlsafe(16)


class IOURepository(BaseRepository[IOU]):
    """
    Repository for IOU data access.

    Every state transition is a single conditional UPDATE so that concurrent
    writers cannot both succeed: claim requires to_user_id IS NULL and
    repayment requires status = pending.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying who may act.
    """

    # -------------------------------------------------------------------------
    # IOU reads
    # -------------------------------------------------------------------------

    def get_by_id(self, iou_id: str) -> Optional[IOU]:
        rows = self._rows_by_id(self._db.table(IOUS_TABLE).select(IOU_SELECT).eq("id", iou_id))
        if not rows:
            return None
        return self._map_to_iou(rows[0])

    def get_by_share_token(self, share_token: str) -> Optional[IOU]:
        result = (
            self._db.table(IOUS_TABLE)
            .select(IOU_SELECT)
            .eq("share_token", share_token)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_iou(result.data[0])

    def get_by_ids(self, iou_ids: list[str]) -> list[IOU]:
        if not iou_ids:
            return []
        result = self._db.table(IOUS_TABLE).select(IOU_SELECT).in_("id", iou_ids).execute()
        return [self._map_to_iou(row) for row in result.data]

    def list_from_user(self, user_id: str) -> list[IOU]:
        result = (
            self._db.table(IOUS_TABLE)
            .select(IOU_SELECT)
            .eq("from_user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_iou(row) for row in result.data]

    def list_to_user(self, user_id: str) -> list[IOU]:
        result = (
            self._db.table(IOUS_TABLE)
            .select(IOU_SELECT)
            .eq("to_user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_iou(row) for row in result.data]

    def list_unlinked_by_phone(self, phone: str) -> list[IOU]:
        result = (
            self._db.table(IOUS_TABLE)
            .select(IOU_SELECT)
            .eq("to_phone", phone)
            .is_("to_user_id", "null")
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_iou(row) for row in result.data]

    # -------------------------------------------------------------------------
    # IOU writes
    # -------------------------------------------------------------------------

    def insert(self, data: dict[str, Any]) -> IOU:
        """
        Create a new IOU record.

        Args:
            data: IOU columns (from_user_id, to_* fields, description, photo_url).
                  A share token is generated when not supplied.

        Returns:
            Created IOU with party references resolved.
        """
        row = {
            "status": IOUStatus.PENDING.value,
            "share_token": generate_share_token(),
            **data,
        }
        result = self._db.table(IOUS_TABLE).insert(row).execute()
        created = result.data[0]
        return self.get_by_id(str(created["id"])) or self._map_to_iou(created)

    def link_by_phone(self, phone: str, user_id: str) -> int:
        result = (
            self._db.table(IOUS_TABLE)
            .update({"to_user_id": user_id})
            .eq("to_phone", phone)
            .is_("to_user_id", "null")
            .execute()
        )
        return len(result.data or [])

    def claim(self, iou_id: str, user_id: str) -> Optional[IOU]:
        rows = self._rows_by_id(
            self._db.table(IOUS_TABLE)
            .update({"to_user_id": user_id})
            .eq("id", iou_id)
            .is_("to_user_id", "null")
        )
        if not rows:
            return None
        return self.get_by_id(iou_id)

    def mark_repaid(self, iou_id: str) -> Optional[IOU]:
        rows = self._rows_by_id(
            self._db.table(IOUS_TABLE)
            .update({"status": IOUStatus.REPAID.value, "repaid_at": self._now()})
            .eq("id", iou_id)
            .eq("status", IOUStatus.PENDING.value)
        )
        if not rows:
            return None
        return self.get_by_id(iou_id)

    # -------------------------------------------------------------------------
    # Archive operations
    # -------------------------------------------------------------------------

    def archive(self, user_id: str, iou_id: str) -> None:
        """Upsert the archive row; an existing row is left untouched."""
        self._db.table(ARCHIVES_TABLE).upsert(
            {"user_id": user_id, "iou_id": iou_id},
            on_conflict="user_id,iou_id",
            ignore_duplicates=True,
        ).execute()

    def unarchive(self, user_id: str, iou_id: str) -> None:
        self._rows_by_id(
            self._db.table(ARCHIVES_TABLE).delete().eq("user_id", user_id).eq("iou_id", iou_id)
        )

    def list_archived_ids(self, user_id: str) -> list[str]:
        result = (
            self._db.table(ARCHIVES_TABLE)
            .select("iou_id")
            .eq("user_id", user_id)
            .order("archived_at", desc=True)
            .execute()
        )
        return [str(row["iou_id"]) for row in result.data]

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_iou(self, data: dict[str, Any]) -> IOU:
        """Map database row (with optional embedded users) to IOU model."""
        return IOU(
            id=str(data["id"]),
            from_user_id=str(data["from_user_id"]),
            to_user_id=str(data["to_user_id"]) if data.get("to_user_id") else None,
            to_phone=data.get("to_phone"),
            to_name=data.get("to_name"),
            description=data.get("description"),
            photo_url=data.get("photo_url"),
            status=IOUStatus(data.get("status", IOUStatus.PENDING.value)),
            share_token=data["share_token"],
            created_at=data["created_at"],
            repaid_at=data.get("repaid_at"),
            from_user=self._map_user_ref(data.get("from_user")),
            to_user=self._map_user_ref(data.get("to_user")),
        )

    def _map_user_ref(self, data: Any) -> Optional[UserSummary]:
        row = self._first(data)
        if row is None:
            return None
        return UserSummary(id=str(row["id"]), display_name=row.get("display_name") or "")
