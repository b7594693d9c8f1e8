"""
IOU ledger service implementation.

Creation, settlement, claiming, archiving and listing of IOUs, with access
control and counterpart notifications.
"""

import logging
from typing import Optional

from modules.notifications.interfaces import INotificationService
from modules.notifications.models import NotificationType
from modules.users.exceptions import InvalidPhoneError, UserNotFoundError
from modules.users.interfaces import IUserRepository
from modules.users.models import User
from shared.phone import normalize_phone

from .access import can_view, can_mark_repaid
from .exceptions import (
    CannotClaimOwnIOUError,
    EmptyIOUError,
    IOUAccessDeniedError,
    IOUAlreadyClaimedError,
    IOUAlreadyRepaidError,
    IOUNotFoundError,
    RecipientNotFoundError,
    SelfIOUError,
)
from .interfaces import IIOUService, IIOURepository
from .linking import IdentityLinker
from .models import IOU, IOUListResponse, IOUStatus, CreateIOURequest, Contact

logger = logging.getLogger(__name__)


def _subject(iou: IOU) -> str:
    return iou.description or "a favor"


def _paginate(ious: list[IOU], limit: int, offset: int) -> tuple[list[IOU], bool]:
    return ious[offset:offset + limit], len(ious) > offset + limit


class IOUService(IIOUService):
    """
    IOU ledger backed by repositories.

    Notifications are fire-and-forget: a failed notification is logged and
    never undoes the ledger change that triggered it.
    """

    def __init__(
        self,
        repository: IIOURepository,
        users: IUserRepository,
        linker: IdentityLinker,
        notifications: Optional[INotificationService] = None,
    ):
        self._repo = repository
        self._users = users
        self._linker = linker
        self._notifications = notifications

    # -------------------------------------------------------------------------
    # Creation and reads
    # -------------------------------------------------------------------------

    async def create(self, from_user_id: str, request: CreateIOURequest) -> IOU:
        if not request.has_content():
            raise EmptyIOUError()

        creator = self._require_user(from_user_id)

        to_phone = normalize_phone(request.to_phone)
        if request.to_phone and to_phone is None:
            raise InvalidPhoneError()

        recipient: Optional[User] = None
        if request.to_user_id:
            recipient = self._users.get_by_id(request.to_user_id)
            if recipient is None:
                raise RecipientNotFoundError(request.to_user_id)
            to_phone = to_phone or recipient.phone
        elif to_phone:
            recipient = self._users.get_by_phone(to_phone)

        if recipient is not None and recipient.id == creator.id:
            raise SelfIOUError()

        iou = self._repo.insert({
            "from_user_id": creator.id,
            "to_user_id": recipient.id if recipient else None,
            "to_phone": to_phone,
            "to_name": request.to_name,
            "description": request.description,
            "photo_url": request.photo_url,
        })
        logger.info("User %s created IOU %s", creator.id, iou.id)

        if recipient is not None:
            await self._notify_safely(
                recipient.id,
                iou.id,
                NotificationType.NEW_IOU,
                f"{creator.display_name} owes you {_subject(iou)}",
            )

        return self._enrich_one(iou)

    async def get(self, iou_id: str) -> Optional[IOU]:
        iou = self._repo.get_by_id(iou_id)
        return self._enrich_one(iou) if iou else None

    async def get_for_user(self, iou_id: str, user_id: str) -> IOU:
        iou = self._require_iou(iou_id)
        user = self._require_user(user_id)
        if not can_view(user, iou):
            raise IOUAccessDeniedError(iou_id)
        return self._enrich_one(iou)

    async def get_by_share_token(self, share_token: str) -> Optional[IOU]:
        iou = self._repo.get_by_share_token(share_token)
        return self._enrich_one(iou) if iou else None

    # -------------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------------

    async def mark_repaid(self, iou_id: str, acting_user_id: str) -> IOU:
        iou = self._require_iou(iou_id)
        actor = self._require_user(acting_user_id)

        if not can_mark_repaid(actor, iou):
            raise IOUAccessDeniedError(iou_id)
        if iou.status == IOUStatus.REPAID:
            raise IOUAlreadyRepaidError(iou_id)

        updated = self._repo.mark_repaid(iou_id)
        if updated is None:
            raise IOUAlreadyRepaidError(iou_id)

        if actor.id == iou.from_user_id:
            recipient_id = self._recipient_user_id(iou)
            message = f"{actor.display_name} repaid you for {_subject(iou)}"
        else:
            recipient_id = iou.from_user_id
            message = f"{actor.display_name} marked your IOU for {_subject(iou)} as repaid"

        if recipient_id is not None:
            await self._notify_safely(recipient_id, iou_id, NotificationType.REPAID, message)

        return self._enrich_one(updated)

    async def claim(self, iou_id: str, claiming_user_id: str) -> IOU:
        iou = self._require_iou(iou_id)

        if iou.from_user_id == claiming_user_id:
            raise CannotClaimOwnIOUError(iou_id)
        if iou.to_user_id is not None:
            raise IOUAlreadyClaimedError(iou_id)

        claimed = self._repo.claim(iou_id, claiming_user_id)
        if claimed is None:
            logger.info("Claim on IOU %s lost to a concurrent claim", iou_id)
            raise IOUAlreadyClaimedError(iou_id)

        claimer = self._users.get_by_id(claiming_user_id)
        name = claimer.display_name if claimer else "Someone"
        await self._notify_safely(
            iou.from_user_id,
            iou_id,
            NotificationType.CLAIMED,
            f"{name} claimed your IOU for {_subject(iou)}",
        )

        return self._enrich_one(claimed)

    # -------------------------------------------------------------------------
    # Per-user archive
    # -------------------------------------------------------------------------

    async def archive(self, user_id: str, iou_id: str) -> bool:
        await self.get_for_user(iou_id, user_id)
        self._repo.archive(user_id, iou_id)
        return True

    async def unarchive(self, user_id: str, iou_id: str) -> bool:
        await self.get_for_user(iou_id, user_id)
        self._repo.unarchive(user_id, iou_id)
        return True

    # -------------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------------

    async def list_for_user(self, user_id: str, limit: int = 50, offset: int = 0) -> IOUListResponse:
        """
        Split the caller's visible IOUs into owed (created) and owing (addressed).

        "Owing" is the union of IOUs linked to the user and unlinked IOUs
        addressed to their phone, deduplicated by ID. Both lists are fully
        loaded, filtered of archived IOUs, then paginated independently.
        """
        user = self._users.get_by_id(user_id)
        if user is None:
            return IOUListResponse()

        archived = set(self._repo.list_archived_ids(user_id))

        owed = [iou for iou in self._repo.list_from_user(user_id) if iou.id not in archived]

        owing_by_id: dict[str, IOU] = {}
        for iou in self._repo.list_to_user(user_id) + self._repo.list_unlinked_by_phone(user.phone):
            if iou.id not in archived:
                owing_by_id.setdefault(iou.id, iou)
        owing = sorted(owing_by_id.values(), key=lambda i: i.created_at, reverse=True)

        owed_page, has_more_owed = _paginate(owed, limit, offset)
        owing_page, has_more_owing = _paginate(owing, limit, offset)

        return IOUListResponse(
            owed=self._linker.enrich(owed_page),
            owing=self._linker.enrich(owing_page),
            has_more_owed=has_more_owed,
            has_more_owing=has_more_owing,
        )

    async def list_archived(self, user_id: str) -> list[IOU]:
        ids = self._repo.list_archived_ids(user_id)
        by_id = {iou.id: iou for iou in self._repo.get_by_ids(ids)}
        return self._linker.enrich([by_id[i] for i in ids if i in by_id])

    async def list_contacts(self, user_id: str) -> list[Contact]:
        """
        Distinct counterparties from the caller's IOUs, most recent first.

        Deduplicated by user ID, then phone, then case-insensitive name.
        """
        user = self._require_user(user_id)

        ious = (
            self._repo.list_from_user(user_id)
            + self._repo.list_to_user(user_id)
            + self._repo.list_unlinked_by_phone(user.phone)
        )
        ious = self._linker.enrich(sorted(ious, key=lambda i: i.created_at, reverse=True))

        contacts: list[Contact] = []
        seen: set[tuple[str, str]] = set()
        for iou in ious:
            if iou.from_user_id == user_id:
                contact = Contact(
                    user_id=iou.to_user_id or (iou.to_user.id if iou.to_user else None),
                    phone=iou.to_phone,
                    display_name=iou.to_user.display_name if iou.to_user else iou.to_name,
                )
            else:
                contact = Contact(
                    user_id=iou.from_user_id,
                    display_name=iou.from_user.display_name if iou.from_user else None,
                )

            keys = set()
            if contact.user_id:
                keys.add(("user", contact.user_id))
            if contact.phone:
                keys.add(("phone", contact.phone))
            if not keys and contact.display_name:
                keys.add(("name", contact.display_name.lower()))
            if not keys or keys & seen or contact.user_id == user_id:
                continue

            seen |= keys
            contacts.append(contact)

        return contacts

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require_iou(self, iou_id: str) -> IOU:
        iou = self._repo.get_by_id(iou_id)
        if iou is None:
            raise IOUNotFoundError(iou_id)
        return iou

    def _require_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def _recipient_user_id(self, iou: IOU) -> Optional[str]:
        if iou.to_user_id is not None:
            return iou.to_user_id
        if iou.to_phone:
            user = self._users.get_by_phone(iou.to_phone)
            return user.id if user else None
        return None

    def _enrich_one(self, iou: IOU) -> IOU:
        return self._linker.enrich([iou])[0]

    async def _notify_safely(
        self,
        user_id: str,
        iou_id: str,
        type: NotificationType,
        message: str,
    ) -> None:
        if self._notifications is None:
            return
        try:
            await self._notifications.notify(user_id, iou_id, type, message)
        except Exception:
            logger.exception("Failed to send %s notification for IOU %s", type.value, iou_id)
