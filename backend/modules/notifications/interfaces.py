"""
Notifications module interfaces.
"""

from typing import Protocol, runtime_checkable

from .models import Notification, NotificationType


@runtime_checkable
class INotificationRepository(Protocol):
    """Data access contract for the notifications table."""

    def insert(self, user_id: str, iou_id: str, type: NotificationType, message: str) -> Notification: ...

    def acknowledge(self, notification_id: str, user_id: str) -> bool:
        """Set acknowledged_at once, only on a row owned by user_id."""
        ...

    def acknowledge_all(self, user_id: str) -> int: ...

    def list_unacknowledged(self, user_id: str) -> list[Notification]: ...


@runtime_checkable
class INotificationService(Protocol):
    """
    Interface for notification fan-out.

    Notifications are append-only: repeated events produce repeated rows.
    """

    async def notify(
        self,
        user_id: str,
        iou_id: str,
        type: NotificationType,
        message: str,
    ) -> Notification: ...

    async def acknowledge(self, notification_id: str, user_id: str) -> bool: ...

    async def acknowledge_all(self, user_id: str) -> int: ...

    async def list_unacknowledged(self, user_id: str) -> list[Notification]: ...
