"""
Access control for IOUs.

An IOU is visible to, and may be settled by, its creator, its resolved
recipient, or (while no recipient user is attached) whoever owns the phone
it was addressed to.
"""

from modules.users.models import User

from .models import IOU


def is_recipient(user: User, iou: IOU) -> bool:
    if iou.to_user_id is not None:
        return user.id == iou.to_user_id
    return iou.to_phone is not None and user.phone == iou.to_phone


def can_view(user: User, iou: IOU) -> bool:
    return user.id == iou.from_user_id or is_recipient(user, iou)


def can_mark_repaid(user: User, iou: IOU) -> bool:
    return can_view(user, iou)
