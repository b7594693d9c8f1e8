"""
IOUs module.

The favor ledger: creation, settlement, claiming via share links,
per-user archiving and contacts.

Public API:
- IIOUService: Interface for ledger operations
- IOU, IOUStatus: Data models
- IdentityLinker: Links phone-addressed IOUs to registered users
"""

from .interfaces import IIOUService, IIOURepository
from .linking import IdentityLinker
from .models import IOU, IOUStatus, CreateIOURequest, Contact

__all__ = [
    "IIOUService",
    "IIOURepository",
    "IdentityLinker",
    "IOU",
    "IOUStatus",
    "CreateIOURequest",
    "Contact",
]
