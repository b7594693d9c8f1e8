"""
IOU API endpoints.

The ledger router is mounted at /api/ious and the contacts router at
/api/contacts. Everything except the share view requires a session.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_iou_service, get_rate_limiter
from api.middleware.auth import get_current_user
from modules.ratelimit.interfaces import IRateLimiter
from shared.models import AuthenticatedUser

from .exceptions import IOUNotFoundError
from .interfaces import IIOUService
from .models import (
    IOU,
    ArchivedIOUListResponse,
    ArchiveResponse,
    ContactListResponse,
    CreateIOURequest,
    IOUListResponse,
    IOUResponse,
    SharedIOU,
    SharedIOUResponse,
    UpdateIOURequest,
)

router = APIRouter()
contacts_router = APIRouter()


def _shared_view(iou: IOU) -> SharedIOU:
    return SharedIOU(
        id=iou.id,
        from_name=iou.from_user.display_name if iou.from_user else None,
        to_name=iou.to_user.display_name if iou.to_user else iou.to_name,
        description=iou.description,
        photo_url=iou.photo_url,
        status=iou.status,
        created_at=iou.created_at,
        repaid_at=iou.repaid_at,
        claimable=iou.to_user_id is None,
    )


@router.get("", response_model=IOUListResponse)
async def list_ious(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIOUService = Depends(get_iou_service),
) -> IOUListResponse:
    """
    List the caller's IOUs split into owed and owing, excluding archived ones.
    """
    return await service.list_for_user(user.id, limit=limit, offset=offset)


@router.post("", response_model=IOUResponse, status_code=201)
async def create_iou(
    request: CreateIOURequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIOUService = Depends(get_iou_service),
    limiter: IRateLimiter = Depends(get_rate_limiter),
) -> IOUResponse:
    """
    Record that the caller owes someone a favor.

    The recipient may be given by user ID, phone, or just a name.
    """
    await limiter.enforce(await limiter.check_api(user.id))
    return IOUResponse(iou=await service.create(user.id, request))


@router.get("/archived", response_model=ArchivedIOUListResponse)
async def list_archived(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIOUService = Depends(get_iou_service),
) -> ArchivedIOUListResponse:
    return ArchivedIOUListResponse(ious=await service.list_archived(user.id))


@router.get("/share/{share_token}", response_model=SharedIOUResponse)
async def get_shared_iou(
    share_token: str,
    service: IIOUService = Depends(get_iou_service),
) -> SharedIOUResponse:
    """
    Public view of an IOU by share token. No phone numbers are exposed.
    """
    iou = await service.get_by_share_token(share_token)
    if iou is None:
        raise IOUNotFoundError(share_token)
    return SharedIOUResponse(iou=_shared_view(iou))


@router.get("/{iou_id}", response_model=IOUResponse)
async def get_iou(
    iou_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIOUService = Depends(get_iou_service),
) -> IOUResponse:
    return IOUResponse(iou=await service.get_for_user(iou_id, user.id))


@router.patch("/{iou_id}", response_model=IOUResponse)
async def update_iou(
    iou_id: str,
    request: UpdateIOURequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIOUService = Depends(get_iou_service),
) -> IOUResponse:
    """
    Mark an IOU as repaid. Either party may do this.
    """
    return IOUResponse(iou=await service.mark_repaid(iou_id, user.id))


@router.post("/{iou_id}/claim", response_model=IOUResponse)
async def claim_iou(
    iou_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIOUService = Depends(get_iou_service),
) -> IOUResponse:
    """
    Claim an IOU from its share link, becoming its recipient.
    """
    return IOUResponse(iou=await service.claim(iou_id, user.id))


@router.post("/{iou_id}/archive", response_model=ArchiveResponse)
async def archive_iou(
    iou_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIOUService = Depends(get_iou_service),
) -> ArchiveResponse:
    return ArchiveResponse(success=await service.archive(user.id, iou_id))


@router.delete("/{iou_id}/archive", response_model=ArchiveResponse)
async def unarchive_iou(
    iou_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIOUService = Depends(get_iou_service),
) -> ArchiveResponse:
    return ArchiveResponse(success=await service.unarchive(user.id, iou_id))


@contacts_router.get("", response_model=ContactListResponse)
async def list_contacts(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIOUService = Depends(get_iou_service),
) -> ContactListResponse:
    """
    People the caller has IOUs with, most recent first.
    """
    return ContactListResponse(contacts=await service.list_contacts(user.id))
