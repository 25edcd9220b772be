"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import MAX_ID, Pagination
from .diamond import DiamondDetail, DiamondSummary
from .thread import (
    ReplyCreate,
    ReplyResponse,
    ThreadCreate,
    ThreadDetailResponse,
    ThreadSummaryResponse,
)
from .user import UserSummary

__all__ = [
    "MAX_ID", "Pagination",
    "DiamondDetail", "DiamondSummary",
    "ReplyCreate", "ReplyResponse",
    "ThreadCreate", "ThreadDetailResponse", "ThreadSummaryResponse",
    "UserSummary",
]
