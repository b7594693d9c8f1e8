"""
Uploads module.

Photo uploads for IOUs, stored in Supabase Storage.
"""

from .interfaces import IObjectStorage, IUploadService
from .service import UploadService, is_image_file

__all__ = [
    "IObjectStorage",
    "IUploadService",
    "UploadService",
    "is_image_file",
]
