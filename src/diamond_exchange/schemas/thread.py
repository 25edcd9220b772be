"""Inquiry thread Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import MAX_ID
from .diamond import DiamondDetail, DiamondSummary
from .user import UserSummary


class ThreadCreate(BaseModel):
    """Schema for sending a new inquiry about a diamond."""

    receiver_id: int = Field(..., ge=1, le=MAX_ID, description="Account receiving the inquiry (usually the seller)")
    diamond_id: int = Field(..., ge=1, le=MAX_ID, description="Listing the inquiry is about")
    subject: str = Field(..., description="Short subject line, up to 200 characters")
    body: str = Field(..., description="Inquiry text, up to 2000 characters")


class ReplyCreate(BaseModel):
    """Schema for appending a reply to a thread."""

    body: str = Field(..., description="Reply text, up to 2000 characters")


class ReplyResponse(BaseModel):
    """A single reply as returned by the API."""

    id: int
    sender: UserSummary
    body: str
    sent_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ThreadSummaryResponse(BaseModel):
    """Thread fields returned by list endpoints."""

    id: int
    sender: UserSummary
    receiver: UserSummary
    diamond: DiamondSummary
    subject: str
    body: str
    is_read: bool
    read_at: datetime | None = None
    reply_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ThreadDetailResponse(BaseModel):
    """Full thread, including every reply in the order it was accepted."""

    id: int
    sender: UserSummary
    receiver: UserSummary
    diamond: DiamondDetail
    subject: str
    body: str
    is_read: bool
    read_at: datetime | None = None
    replies: list[ReplyResponse]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
