# src/diamond_exchange/api/v1/endpoints/messages.py
"""Inquiry message endpoints for the Diamond Exchange API."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Path, Query, status

from diamond_exchange.api.v1.dependencies import CurrentUserDep, ThreadServiceDep
from diamond_exchange.schemas.common import MAX_ID, Pagination
from diamond_exchange.schemas.thread import ReplyCreate, ThreadCreate
from diamond_exchange.services.thread_service import (
    ThreadPage,
    to_thread_detail,
    to_thread_summary,
)

router = APIRouter(prefix="/messages", tags=["messages"])

MessageId = Annotated[int, Path(ge=1, le=MAX_ID, description="Thread id")]


def _serialize_page(page: ThreadPage) -> dict[str, Any]:
    pagination = Pagination(
        current_page=page.page,
        total_pages=page.total_pages,
        total_items=page.total,
        unread_count=page.unread_count,
    )
    return {
        "success": True,
        "messages": [to_thread_summary(thread).model_dump(mode="json") for thread in page.items],
        "pagination": pagination.model_dump(exclude_none=True),
    }


@router.post("/send", status_code=status.HTTP_201_CREATED)
async def send_message(
    message_data: ThreadCreate,
    current_user: CurrentUserDep,
    service: ThreadServiceDep,
) -> dict[str, Any]:
    """Send an inquiry about a diamond to its seller."""
    thread = service.send(
        sender_id=current_user.id,
        receiver_id=message_data.receiver_id,
        diamond_id=message_data.diamond_id,
        subject=message_data.subject,
        body=message_data.body,
    )
    return {
        "success": True,
        "message": "Message sent successfully",
        "data": to_thread_detail(thread).model_dump(mode="json"),
    }


@router.get("/inbox")
async def get_inbox(
    current_user: CurrentUserDep,
    service: ThreadServiceDep,
    page: int = Query(1, le=MAX_ID, description="1-based page number"),
    limit: int | None = Query(None, le=MAX_ID, description="Threads per page"),
    unread_only: bool = Query(False, description="Only return threads not yet opened"),
) -> dict[str, Any]:
    """Get inquiries received by the current user."""
    result = service.list_inbox(current_user.id, page=page, limit=limit, unread_only=unread_only)
    return _serialize_page(result)


@router.get("/sent")
async def get_sent_messages(
    current_user: CurrentUserDep,
    service: ThreadServiceDep,
    page: int = Query(1, le=MAX_ID, description="1-based page number"),
    limit: int | None = Query(None, le=MAX_ID, description="Threads per page"),
) -> dict[str, Any]:
    """Get inquiries sent by the current user."""
    return _serialize_page(service.list_sent(current_user.id, page=page, limit=limit))


@router.get("/unread-count")
async def get_unread_count(
    current_user: CurrentUserDep,
    service: ThreadServiceDep,
) -> dict[str, Any]:
    """Return the number of unopened inbox threads for notification badges."""
    return {"success": True, "unread_count": service.unread_count(current_user.id)}


@router.get("/{message_id}")
async def get_message(
    message_id: MessageId,
    current_user: CurrentUserDep,
    service: ThreadServiceDep,
) -> dict[str, Any]:
    """Get a single thread with its replies, marking it read for the receiver."""
    thread = service.get_thread(message_id, current_user.id)
    return {"success": True, "message": to_thread_detail(thread).model_dump(mode="json")}


@router.post("/{message_id}/reply")
async def reply_to_message(
    message_id: MessageId,
    reply_data: ReplyCreate,
    current_user: CurrentUserDep,
    service: ThreadServiceDep,
) -> dict[str, Any]:
    """Append a reply to a thread."""
    thread = service.reply(message_id, current_user.id, reply_data.body)
    return {
        "success": True,
        "message": "Reply sent successfully",
        "data": to_thread_detail(thread).model_dump(mode="json"),
    }


@router.put("/{message_id}/read")
async def mark_message_read(
    message_id: MessageId,
    current_user: CurrentUserDep,
    service: ThreadServiceDep,
) -> dict[str, Any]:
    """Mark a received thread as read."""
    service.mark_read(message_id, current_user.id)
    return {"success": True, "message": "Message marked as read"}


@router.delete("/{message_id}")
async def delete_message(
    message_id: MessageId,
    current_user: CurrentUserDep,
    service: ThreadServiceDep,
) -> dict[str, Any]:
    """Permanently delete a thread."""
    service.delete(message_id, current_user.id)
    return {"success": True, "message": "Message deleted successfully"}
