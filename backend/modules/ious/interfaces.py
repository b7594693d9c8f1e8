"""
IOUs module interfaces.

The API layer depends on IIOUService for all ledger operations.
"""

from typing import Protocol, Optional, Any, runtime_checkable

from .models import IOU, IOUListResponse, CreateIOURequest, Contact


@runtime_checkable
class IIOURepository(Protocol):
    """Data access contract for the IOU and archive tables."""

    def insert(self, data: dict[str, Any]) -> IOU: ...

    def get_by_id(self, iou_id: str) -> Optional[IOU]: ...

    def get_by_share_token(self, share_token: str) -> Optional[IOU]: ...

    def get_by_ids(self, iou_ids: list[str]) -> list[IOU]: ...

    def list_from_user(self, user_id: str) -> list[IOU]: ...

    def list_to_user(self, user_id: str) -> list[IOU]: ...

    def list_unlinked_by_phone(self, phone: str) -> list[IOU]: ...

    def link_by_phone(self, phone: str, user_id: str) -> int:
        """Attach user_id to every IOU for phone whose to_user_id is null."""
        ...

    def claim(self, iou_id: str, user_id: str) -> Optional[IOU]:
        """Set to_user_id only if still null; None when another writer won."""
        ...

    def mark_repaid(self, iou_id: str) -> Optional[IOU]:
        """Move pending -> repaid; None if the IOU was not pending."""
        ...

    def archive(self, user_id: str, iou_id: str) -> None: ...

    def unarchive(self, user_id: str, iou_id: str) -> None: ...

    def list_archived_ids(self, user_id: str) -> list[str]:
        """Archived IOU ids for a user, most recently archived first."""
        ...


@runtime_checkable
class IIOUService(Protocol):
    """
    Interface for IOU ledger operations.

    Authorization is decided here: callers pass the acting user's ID.
    """

    async def create(self, from_user_id: str, request: CreateIOURequest) -> IOU:
        """
        Record a new IOU.

        Raises:
            EmptyIOUError: If no recipient, description or photo is given
            RecipientNotFoundError: If an explicit to_user_id does not exist
            SelfIOUError: If the recipient resolves to the creator
        """
        ...

    async def get(self, iou_id: str) -> Optional[IOU]:
        """Get an IOU by ID without authorization, enriched for display."""
        ...

    async def get_for_user(self, iou_id: str, user_id: str) -> IOU:
        """
        Get an IOU the caller may view.

        Raises:
            IOUNotFoundError: If the IOU does not exist (checked first)
            IOUAccessDeniedError: If the caller may not view it
        """
        ...

    async def get_by_share_token(self, share_token: str) -> Optional[IOU]:
        """Get an IOU by its public share token. Not access-gated."""
        ...

    async def mark_repaid(self, iou_id: str, acting_user_id: str) -> IOU:
        """
        Settle an IOU and notify the other party.

        Raises:
            IOUNotFoundError, IOUAccessDeniedError, IOUAlreadyRepaidError
        """
        ...

    async def claim(self, iou_id: str, claiming_user_id: str) -> IOU:
        """
        Attach the caller as recipient of an unclaimed IOU.

        Raises:
            IOUNotFoundError, CannotClaimOwnIOUError, IOUAlreadyClaimedError
        """
        ...

    async def archive(self, user_id: str, iou_id: str) -> bool: ...

    async def unarchive(self, user_id: str, iou_id: str) -> bool: ...

    async def list_for_user(self, user_id: str, limit: int = 50, offset: int = 0) -> IOUListResponse: ...

    async def list_archived(self, user_id: str) -> list[IOU]: ...

    async def list_contacts(self, user_id: str) -> list[Contact]: ...
