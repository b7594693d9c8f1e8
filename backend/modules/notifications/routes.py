"""
Notification API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_notification_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import INotificationService
from .models import AcknowledgeRequest, AcknowledgeResponse, NotificationListResponse

router = APIRouter()


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    user: AuthenticatedUser = Depends(get_current_user),
    service: INotificationService = Depends(get_notification_service),
) -> NotificationListResponse:
    """
    List the caller's unacknowledged notifications, newest first.
    """
    return NotificationListResponse(notifications=await service.list_unacknowledged(user.id))


@router.post("/acknowledge", response_model=AcknowledgeResponse)
async def acknowledge(
    request: AcknowledgeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: INotificationService = Depends(get_notification_service),
) -> AcknowledgeResponse:
    """
    Acknowledge one notification, or all of the caller's notifications.
    """
    if request.all:
        count = await service.acknowledge_all(user.id)
    else:
        count = int(await service.acknowledge(request.id, user.id))
    return AcknowledgeResponse(acknowledged=count)
