"""
Uploads module interfaces.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IObjectStorage(Protocol):
    """Blob store that returns a publicly readable URL for each object."""

    def upload(self, data: bytes, key: str, content_type: str) -> str:
        """
        Store data under key.

        Returns:
            Public URL of the stored object

        Raises:
            ExternalServiceError: If the store rejects the upload
        """
        ...


@runtime_checkable
class IUploadService(Protocol):
    """Interface for photo uploads attached to IOUs."""

    async def upload_image(
        self,
        data: bytes,
        filename: str | None,
        content_type: str | None,
    ) -> str:
        """
        Validate and store an image.

        Raises:
            EmptyUploadError, NotAnImageError, FileTooLargeError
        """
        ...
