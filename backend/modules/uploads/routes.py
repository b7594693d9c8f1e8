"""
Upload API endpoint.
"""

from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel

from api.dependencies import get_rate_limiter, get_upload_service
from api.middleware.auth import get_current_user
from modules.ratelimit.interfaces import IRateLimiter
from shared.models import AuthenticatedUser

from .exceptions import FileTooLargeError
from .service import UploadService

router = APIRouter()


class UploadResponse(BaseModel):
    url: str


@router.post("", response_model=UploadResponse)
async def upload(
    file: UploadFile = File(...),
    user: AuthenticatedUser = Depends(get_current_user),
    service: UploadService = Depends(get_upload_service),
    limiter: IRateLimiter = Depends(get_rate_limiter),
) -> UploadResponse:
    """
    Upload a photo for an IOU and get back its public URL.
    """
    await limiter.enforce(await limiter.check_api(user.id))

    # One extra byte tells us the file is over the cap without reading all of it.
    data = await file.read(service.max_bytes + 1)
    if len(data) > service.max_bytes:
        raise FileTooLargeError(service.max_bytes)

    url = await service.upload_image(data, file.filename, file.content_type)
    return UploadResponse(url=url)
