"""
Notifications module.

Durable per-user messages written as a side effect of IOU events.

Public API:
- INotificationService: Interface for notification operations
- Notification, NotificationType: Data models
"""

from .interfaces import INotificationService, INotificationRepository
from .models import Notification, NotificationType, AcknowledgeRequest

__all__ = [
    "INotificationService",
    "INotificationRepository",
    "Notification",
    "NotificationType",
    "AcknowledgeRequest",
]
