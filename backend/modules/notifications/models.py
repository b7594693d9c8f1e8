"""
Notifications module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class NotificationType(str, Enum):
    """Ledger events that notify the counterpart."""

    NEW_IOU = "new_iou"  # Someone recorded that they owe you
    REPAID = "repaid"    # The other party settled an IOU
    CLAIMED = "claimed"  # Someone claimed your IOU from its share link


class Notification(BaseModel):
    """An immutable message for one user about one IOU."""

    id: str
    user_id: str = Field(..., description="Recipient of the notification")
    iou_id: str = Field(..., description="IOU the notification is about")
    type: NotificationType
    message: str
    created_at: datetime
    acknowledged_at: Optional[datetime] = None


class NotificationListResponse(BaseModel):
    notifications: list[Notification]


class AcknowledgeRequest(BaseModel):
    """Acknowledge one notification by id, or all of them."""

    id: Optional[str] = None
    all: bool = False

    @model_validator(mode="after")
    def _require_target(self) -> "AcknowledgeRequest":
        if not self.all and not self.id:
            raise ValueError("Must provide 'id' or 'all: true'")
        return self


class AcknowledgeResponse(BaseModel):
    success: bool = True
    acknowledged: int = Field(0, description="Number of notifications acknowledged")
