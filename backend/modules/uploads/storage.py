"""
Supabase Storage implementation of IObjectStorage.
"""

import logging

from supabase import Client

from shared.exceptions import ExternalServiceError

from .interfaces import IObjectStorage

logger = logging.getLogger(__name__)


class SupabaseObjectStorage(IObjectStorage):
    """Stores objects in a public Supabase Storage bucket."""

    def __init__(self, client: Client, bucket: str):
        self._client = client
        self._bucket = bucket

    def upload(self, data: bytes, key: str, content_type: str) -> str:
        bucket = self._client.storage.from_(self._bucket)
        try:
            bucket.upload(
                path=key,
                file=data,
                file_options={"content-type": content_type},
            )
        except Exception as e:
            logger.error("Upload of %s to bucket %s failed: %s", key, self._bucket, e)
            raise ExternalServiceError(
                "Failed to store upload",
                service="supabase-storage",
                code="UPLOAD_FAILED",
            ) from e
        return bucket.get_public_url(key)
