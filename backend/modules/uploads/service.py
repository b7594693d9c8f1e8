"""
Upload service implementation.

Accepts an image by MIME type or, when the client sends a generic type
(common for HEIC from phones), by file extension.
"""

import logging
import os
import secrets
import string
import time
from typing import Optional

from .exceptions import EmptyUploadError, FileTooLargeError, NotAnImageError
from .interfaces import IObjectStorage, IUploadService

logger = logging.getLogger(__name__)

IMAGE_CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "heic": "image/heic",
    "heif": "image/heif",
    "bmp": "image/bmp",
    "tiff": "image/tiff",
}

DEFAULT_CONTENT_TYPE = "image/jpeg"
UPLOAD_PREFIX = "uploads"

_NAME_ALPHABET = string.ascii_lowercase + string.digits


def file_extension(filename: Optional[str]) -> str:
    if not filename:
        return ""
    return os.path.splitext(filename)[1].lstrip(".").lower()


def is_image_file(filename: Optional[str], content_type: Optional[str]) -> bool:
    if content_type and content_type.startswith("image/"):
        return True
    return file_extension(filename) in IMAGE_CONTENT_TYPES


def resolve_content_type(filename: Optional[str], content_type: Optional[str]) -> str:
    if content_type and content_type.startswith("image/"):
        return content_type
    return IMAGE_CONTENT_TYPES.get(file_extension(filename), DEFAULT_CONTENT_TYPE)


def build_object_key(filename: Optional[str], now_ms: Optional[int] = None) -> str:
    """
    Build a storage key like uploads/1700000000000-a1b2c3.png.

    The client's filename is never used beyond its extension.
    """
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    ext = file_extension(filename) or "jpg"
    name = "".join(secrets.choice(_NAME_ALPHABET) for _ in range(6))
    return f"{UPLOAD_PREFIX}/{now_ms}-{name}.{ext}"


class UploadService(IUploadService):
    """Validates images and hands them to object storage."""

    def __init__(self, storage: IObjectStorage, max_bytes: int):
        self._storage = storage
        self._max_bytes = max_bytes

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    async def upload_image(
        self,
        data: bytes,
        filename: Optional[str],
        content_type: Optional[str],
    ) -> str:
        if not data:
            raise EmptyUploadError()
        if not is_image_file(filename, content_type):
            raise NotAnImageError(content_type)
        if len(data) > self._max_bytes:
            raise FileTooLargeError(self._max_bytes)

        key = build_object_key(filename)
        url = self._storage.upload(data, key, resolve_content_type(filename, content_type))
        logger.info("Stored upload %s (%d bytes)", key, len(data))
        return url
