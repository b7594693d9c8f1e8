"""
IOUs module data models.

These models define the ledger's records and the request/response shapes
of its API.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Literal
from pydantic import BaseModel, Field, field_validator

from modules.users.models import UserSummary


class IOUStatus(str, Enum):
    """IOU settlement status. REPAID is terminal."""

    PENDING = "pending"
    REPAID = "repaid"


class IOU(BaseModel):
    """
    A record that from_user owes the recipient a favor.

    The recipient is known by any of to_user_id, to_phone or to_name.
    from_user / to_user are display references resolved at read time.
    """

    id: str
    from_user_id: str = Field(..., description="Creator, the party who owes")
    to_user_id: Optional[str] = Field(None, description="Resolved recipient, once known")
    to_phone: Optional[str] = Field(None, description="Recipient's canonical phone")
    to_name: Optional[str] = Field(None, description="Free-text recipient label")
    description: Optional[str] = None
    photo_url: Optional[str] = None
    status: IOUStatus = IOUStatus.PENDING
    share_token: str
    created_at: datetime
    repaid_at: Optional[datetime] = None

    from_user: Optional[UserSummary] = None
    to_user: Optional[UserSummary] = None


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class CreateIOURequest(BaseModel):
    """Request to record a new IOU. At least one field must carry content."""

    to_user_id: Optional[str] = Field(None, description="Pre-linked recipient user")
    to_phone: Optional[str] = Field(None, max_length=32, description="Recipient phone")
    to_name: Optional[str] = Field(None, max_length=100, description="Recipient name")
    description: Optional[str] = Field(None, max_length=1000, description="The favor")
    photo_url: Optional[str] = Field(None, max_length=2048, description="Uploaded photo URL")

    @field_validator("to_user_id", "to_phone", "to_name", "description", "photo_url")
    @classmethod
    def _strip(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)

    def has_recipient(self) -> bool:
        return any((self.to_user_id, self.to_phone, self.to_name))

    def has_content(self) -> bool:
        return self.has_recipient() or bool(self.description) or bool(self.photo_url)


class UpdateIOURequest(BaseModel):
    action: Literal["repaid"]


class IOUResponse(BaseModel):
    iou: IOU


class IOUListResponse(BaseModel):
    """The caller's IOUs split by direction, each list paginated separately."""

    owed: list[IOU] = Field(default_factory=list, description="IOUs the caller created")
    owing: list[IOU] = Field(default_factory=list, description="IOUs addressed to the caller")
    has_more_owed: bool = False
    has_more_owing: bool = False


class ArchivedIOUListResponse(BaseModel):
    ious: list[IOU]


class SharedIOU(BaseModel):
    """
    Public view of an IOU for its share link.

    Anyone holding the token can see this, so it carries names but no phones.
    """

    id: str
    from_name: Optional[str] = None
    to_name: Optional[str] = None
    description: Optional[str] = None
    photo_url: Optional[str] = None
    status: IOUStatus
    created_at: datetime
    repaid_at: Optional[datetime] = None
    claimable: bool = Field(..., description="True until a recipient user is attached")


class SharedIOUResponse(BaseModel):
    iou: SharedIOU


class Contact(BaseModel):
    """A counterparty drawn from the caller's IOUs, for picking a recipient."""

    user_id: Optional[str] = None
    phone: Optional[str] = None
    display_name: Optional[str] = None


class ContactListResponse(BaseModel):
    contacts: list[Contact]


class ArchiveResponse(BaseModel):
    success: bool = True
