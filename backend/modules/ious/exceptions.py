"""
IOUs module exceptions.
"""

from shared.exceptions import (
    NotFoundError,
    ValidationError,
    AuthorizationError,
    ConflictError,
    InvalidOperationError,
)


class IOUNotFoundError(NotFoundError):
    """Raised when an IOU is not found."""

    def __init__(self, iou_id: str):
        super().__init__(
            "IOU not found",
            code="IOU_NOT_FOUND",
            details={"iou_id": iou_id},
        )


class IOUAccessDeniedError(AuthorizationError):
    """Raised when the caller is neither the creator nor a resolvable recipient."""

    def __init__(self, iou_id: str):
        super().__init__(
            "You do not have access to this IOU",
            code="IOU_ACCESS_DENIED",
            details={"iou_id": iou_id},
        )


class EmptyIOUError(ValidationError):
    """Raised when an IOU would carry no recipient, description or photo."""

    def __init__(self):
        super().__init__(
            "At least a recipient, description, or photo is required",
            code="IOU_EMPTY",
        )


class RecipientNotFoundError(NotFoundError):
    """Raised when an explicit recipient user ID does not exist."""

    def __init__(self, user_id: str):
        super().__init__(
            "Recipient not found",
            code="RECIPIENT_NOT_FOUND",
            details={"user_id": user_id},
        )


class SelfIOUError(InvalidOperationError):
    """Raised when the recipient resolves to the creator."""

    def __init__(self):
        super().__init__("You cannot create an IOU to yourself", code="SELF_IOU")


class CannotClaimOwnIOUError(InvalidOperationError):
    """Raised when the creator tries to claim their own IOU."""

    def __init__(self, iou_id: str):
        super().__init__(
            "You cannot claim your own IOU",
            code="CANNOT_CLAIM_OWN_IOU",
            details={"iou_id": iou_id},
        )


class IOUAlreadyClaimedError(ConflictError):
    """Raised when an IOU already has a recipient user."""

    def __init__(self, iou_id: str):
        super().__init__(
            "This IOU has already been claimed",
            code="IOU_ALREADY_CLAIMED",
            details={"iou_id": iou_id},
        )


class IOUAlreadyRepaidError(InvalidOperationError):
    """Raised when marking an already-repaid IOU as repaid."""

    def __init__(self, iou_id: str):
        super().__init__(
            "This IOU has already been repaid",
            code="IOU_ALREADY_REPAID",
            details={"iou_id": iou_id},
        )
