"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field

# Largest value a signed 64-bit INTEGER column holds.
MAX_ID = 2**63 - 1


class Pagination(BaseModel):
    """Page metadata returned by inbox and sent listings."""

    current_page: int = Field(..., description="1-based page number that was returned.")
    total_pages: int = Field(..., description="ceil(total_items / limit).")
    total_items: int = Field(..., description="Number of threads matching the filter.")
    unread_count: int | None = Field(
        None,
        description="Unread inbox threads for the caller; omitted for sent listings.",
    )
