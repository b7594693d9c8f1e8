"""
Identity linking.

IOUs can be addressed to a phone before its owner registers. Linking
attaches those IOUs to the user once the phone is claimed by an account;
read-time enrichment fills in display names without persisting anything.
"""

from modules.users.interfaces import IIdentityLinker, IUserRepository
from modules.users.models import UserSummary
from shared.phone import normalize_phone

from .interfaces import IIOURepository
from .models import IOU


class IdentityLinker(IIdentityLinker):
    """Links and enriches recipient references on IOUs."""

    def __init__(self, ious: IIOURepository, users: IUserRepository):
        self._ious = ious
        self._users = users

    async def link_by_phone(self, phone: str, user_id: str) -> int:
        """
        Attach every unlinked IOU addressed to phone to user_id.

        Idempotent, and never overwrites an IOU that already has a recipient.

        Returns:
            Number of IOUs newly linked.
        """
        normalized = normalize_phone(phone)
        if normalized is None:
            return 0
        return self._ious.link_by_phone(normalized, user_id)

    def enrich(self, ious: list[IOU]) -> list[IOU]:
        """
        Resolve display references for IOUs still missing a recipient user.

        Only the to_user display field is filled in; to_user_id is untouched
        and nothing is written back.
        """
        phones = {
            iou.to_phone
            for iou in ious
            if iou.to_user_id is None and iou.to_user is None and iou.to_phone
        }
        if not phones:
            return ious

        by_phone = {user.phone: user for user in self._users.get_by_phones(sorted(phones))}

        enriched = []
        for iou in ious:
            user = by_phone.get(iou.to_phone) if iou.to_user_id is None else None
            if user is not None and iou.to_user is None:
                iou = iou.model_copy(
                    update={"to_user": UserSummary(id=user.id, display_name=user.display_name)}
                )
            enriched.append(iou)
        return enriched
