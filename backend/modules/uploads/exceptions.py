"""
Uploads module exceptions.
"""

from shared.exceptions import ValidationError


class EmptyUploadError(ValidationError):
    def __init__(self):
        super().__init__("No file provided", code="EMPTY_UPLOAD")


class NotAnImageError(ValidationError):
    """Raised when the file is neither an image MIME type nor an image extension."""

    def __init__(self, content_type: str | None):
        super().__init__(
            "File must be an image",
            code="NOT_AN_IMAGE",
            details={"content_type": content_type},
        )


class FileTooLargeError(ValidationError):
    def __init__(self, max_bytes: int):
        super().__init__(
            f"File must be at most {max_bytes // (1024 * 1024)} MB",
            code="FILE_TOO_LARGE",
            details={"max_bytes": max_bytes},
        )
