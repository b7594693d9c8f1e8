"""
Notification repository for database access.
"""

from typing import Any

from shared.repository import BaseRepository
from .models import Notification, NotificationType

NOTIFICATIONS_TABLE = "iou_notifications"


class NotificationRepository(BaseRepository[Notification]):
    """
    Repository for the iou_notifications table.

    Rows are never updated except for acknowledged_at, and never deleted.
    """

    def insert(
        self,
        user_id: str,
        iou_id: str,
        type: NotificationType,
        message: str,
    ) -> Notification:
        data = {
            "user_id": user_id,
            "iou_id": iou_id,
            "type": type.value,
            "message": message,
        }
        result = self._db.table(NOTIFICATIONS_TABLE).insert(data).execute()
        return self._map_to_notification(result.data[0])

    def acknowledge(self, notification_id: str, user_id: str) -> bool:
        rows = self._rows_by_id(
            self._db.table(NOTIFICATIONS_TABLE)
            .update({"acknowledged_at": self._now()})
            .eq("id", notification_id)
            .eq("user_id", user_id)
            .is_("acknowledged_at", "null")
        )
        return bool(rows)

    def acknowledge_all(self, user_id: str) -> int:
        result = (
            self._db.table(NOTIFICATIONS_TABLE)
            .update({"acknowledged_at": self._now()})
            .eq("user_id", user_id)
            .is_("acknowledged_at", "null")
            .execute()
        )
        return len(result.data or [])

    def list_unacknowledged(self, user_id: str) -> list[Notification]:
        result = (
            self._db.table(NOTIFICATIONS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .is_("acknowledged_at", "null")
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_notification(row) for row in result.data]

    def _map_to_notification(self, data: dict[str, Any]) -> Notification:
        """Map database row to Notification model."""
        return Notification(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            iou_id=str(data["iou_id"]),
            type=NotificationType(data["type"]),
            message=data["message"],
            created_at=data["created_at"],
            acknowledged_at=data.get("acknowledged_at"),
        )
