"""
Notification service implementation.
"""

from .interfaces import INotificationService, INotificationRepository
from .models import Notification, NotificationType


class NotificationService(INotificationService):
    """Append-only notifications with owner-only acknowledgement."""

    def __init__(self, repository: INotificationRepository):
        self._repo = repository

    async def notify(
        self,
        user_id: str,
        iou_id: str,
        type: NotificationType,
        message: str,
    ) -> Notification:
        return self._repo.insert(user_id, iou_id, type, message)

    async def acknowledge(self, notification_id: str, user_id: str) -> bool:
        """Acknowledge a notification; silently refuses rows owned by someone else."""
        return self._repo.acknowledge(notification_id, user_id)

    async def acknowledge_all(self, user_id: str) -> int:
        return self._repo.acknowledge_all(user_id)

    async def list_unacknowledged(self, user_id: str) -> list[Notification]:
        return self._repo.list_unacknowledged(user_id)
