"""Inquiry thread operations: send, list, open, reply, mark read, delete."""
from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from diamond_exchange.core.errors import (
    InternalError,
    InvalidRecipientError,
    NotFoundError,
    ValidationError,
)
from diamond_exchange.core.settings import settings
from diamond_exchange.models.thread import BODY_MAX_LENGTH, SUBJECT_MAX_LENGTH, Thread
from diamond_exchange.repositories.thread_repo import ThreadRepository
from diamond_exchange.schemas.common import MAX_ID
from diamond_exchange.schemas.diamond import DiamondSummary
from diamond_exchange.schemas.thread import ThreadDetailResponse, ThreadSummaryResponse
from diamond_exchange.schemas.user import UserSummary
from diamond_exchange.services.access import ensure_participant, ensure_receiver

logger = logging.getLogger(__name__)

__all__ = [
    "ThreadPage",
    "ThreadService",
    "to_thread_summary",
    "to_thread_detail",
]


@dataclass
class ThreadPage:
    """One page of an inbox or sent listing."""

    items: list[Thread]
    total: int
    page: int
    limit: int
    unread_count: int | None = None
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        self.total_pages = math.ceil(self.total / self.limit) if self.limit else 0


def _clean_text(value: str | None, label: str, max_length: int) -> str:
    """Trim ``value`` and enforce presence and length."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{label} is required")
    if len(text) > max_length:
        raise ValidationError(f"{label} cannot exceed {max_length} characters")
    return text


def _storable_id(value: int) -> bool:
    return 1 <= value <= MAX_ID


class ThreadService:
    """Coordinates thread storage with participant checks.

    Every public method runs as a single transaction. Store failures roll the
    session back and surface as ``InternalError``.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repo = ThreadRepository(session)

    @contextmanager
    def _store_guard(self, failure_message: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("%s: %s", failure_message, exc)
            raise InternalError(failure_message) from exc

    def _load(self, thread_id: int) -> Thread:
        if not _storable_id(thread_id):
            raise NotFoundError("Message not found")
        thread = self.repo.get_by_id(thread_id)
        if thread is None:
            raise NotFoundError("Message not found")
        return thread

    def send(
        self,
        sender_id: int,
        receiver_id: int | None,
        diamond_id: int | None,
        subject: str | None,
        body: str | None,
    ) -> Thread:
        """Create a new unread thread about a diamond.

        Each call creates its own thread, even when the same buyer already
        asked the same seller about the same diamond.

        Raises:
            ValidationError: Missing fields, blank text or text over the limits.
            InvalidRecipientError: The caller addressed themselves.
            NotFoundError: The diamond or receiver does not exist.
            InternalError: The store rejected the write.
        """
        if receiver_id is None or diamond_id is None or subject is None or body is None:
            raise ValidationError("Receiver, diamond, subject, and message are required")
        clean_subject = _clean_text(subject, "Subject", SUBJECT_MAX_LENGTH)
        clean_body = _clean_text(body, "Message", BODY_MAX_LENGTH)
        if sender_id == receiver_id:
            raise InvalidRecipientError("You cannot send a message to yourself")

        with self._store_guard("Failed to send message"):
            if not _storable_id(diamond_id) or not self.repo.diamond_exists(diamond_id):
                raise NotFoundError("Diamond not found")
            if not _storable_id(receiver_id) or not self.repo.user_exists(receiver_id):
                raise NotFoundError("Receiver not found")

            thread = self.repo.create(
                sender_id=sender_id,
                receiver_id=receiver_id,
                diamond_id=diamond_id,
                subject=clean_subject,
                body=clean_body,
            )
            thread_id = thread.id
            self.session.commit()
            logger.info(
                "Message %s sent from user %s to user %s about diamond %s",
                thread_id,
                sender_id,
                receiver_id,
                diamond_id,
            )
            return self._load_fresh(thread_id)

    def _page_bounds(self, page: int, limit: int | None) -> tuple[int, int]:
        if limit is None:
            limit = settings.default_page_size
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if limit < 1:
            raise ValidationError("Limit must be 1 or greater")
        limit = min(limit, settings.max_page_size)
        if (page - 1) * limit > MAX_ID:
            raise ValidationError("Page is out of range")
        return page, limit

    def list_inbox(
        self,
        user_id: int,
        page: int = 1,
        limit: int | None = None,
        unread_only: bool = False,
    ) -> ThreadPage:
        """Return threads received by ``user_id``, newest first.

        ``unread_count`` always counts every unread inbox thread, regardless
        of ``unread_only``.
        """
        page, limit = self._page_bounds(page, limit)
        with self._store_guard("Failed to fetch messages"):
            items = self.repo.list_for_receiver(
                user_id,
                offset=(page - 1) * limit,
                limit=limit,
                unread_only=unread_only,
            )
            total = self.repo.count_for_receiver(user_id, unread_only=unread_only)
            unread = self.repo.count_for_receiver(user_id, unread_only=True)
        logger.debug("Fetched %d inbox messages for user %s", len(items), user_id)
        return ThreadPage(items=items, total=total, page=page, limit=limit, unread_count=unread)

    def list_sent(self, user_id: int, page: int = 1, limit: int | None = None) -> ThreadPage:
        """Return threads sent by ``user_id``, newest first."""
        page, limit = self._page_bounds(page, limit)
        with self._store_guard("Failed to fetch sent messages"):
            items = self.repo.list_for_sender(user_id, offset=(page - 1) * limit, limit=limit)
            total = self.repo.count_for_sender(user_id)
        logger.debug("Fetched %d sent messages for user %s", len(items), user_id)
        return ThreadPage(items=items, total=total, page=page, limit=limit)

    def unread_count(self, user_id: int) -> int:
        """Return how many inbox threads ``user_id`` has not opened yet."""
        with self._store_guard("Failed to count unread messages"):
            return self.repo.count_for_receiver(user_id, unread_only=True)

    def get_thread(self, thread_id: int, user_id: int) -> Thread:
        """Return a thread with its replies.

        Opening an unread thread as its receiver marks it read in the same
        call. The sender opening it never changes the flag.
        """
        with self._store_guard("Failed to fetch message"):
            thread = self._load(thread_id)
            ensure_participant(thread, user_id, "view this message")
            if thread.receiver_id == user_id and not thread.is_read:
                if self.repo.mark_read(thread.id):
                    logger.debug("Message %s marked read on open", thread.id)
                self.session.commit()
                thread = self._load_fresh(thread_id)
            return thread

    def reply(self, thread_id: int, user_id: int, body: str | None) -> Thread:
        """Append a reply from ``user_id`` and return the updated thread.

        The read flag of the thread is left untouched.
        """
        clean_body = _clean_text(body, "Reply message", BODY_MAX_LENGTH)
        with self._store_guard("Failed to send reply"):
            thread = self._load(thread_id)
            ensure_participant(thread, user_id, "reply to this message")
            reply_id = self.repo.append_reply(thread.id, sender_id=user_id, body=clean_body)
            self.session.commit()
            logger.info("Reply %s added to message %s by user %s", reply_id, thread_id, user_id)
            return self._load_fresh(thread_id)

    def mark_read(self, thread_id: int, user_id: int) -> None:
        """Mark a thread read. Only its receiver may do this; repeats are no-ops."""
        with self._store_guard("Failed to mark message as read"):
            thread = self._load(thread_id)
            ensure_receiver(thread, user_id, "mark this message as read")
            self.repo.mark_read(thread.id)
            self.session.commit()

    def delete(self, thread_id: int, user_id: int) -> None:
        """Permanently remove a thread and its replies."""
        with self._store_guard("Failed to delete message"):
            thread = self._load(thread_id)
            ensure_participant(thread, user_id, "delete this message")
            self.repo.delete(thread.id)
            self.session.commit()
        logger.info("Message %s deleted by user %s", thread_id, user_id)

    def _load_fresh(self, thread_id: int) -> Thread:
        thread = self.repo.get_by_id(thread_id, fresh=True)
        if thread is None:
            raise NotFoundError("Message not found")
        return thread


def to_thread_summary(thread: Thread) -> ThreadSummaryResponse:
    """Project a thread into its list-row representation."""
    return ThreadSummaryResponse(
        id=thread.id,
        sender=UserSummary.model_validate(thread.sender),
        receiver=UserSummary.model_validate(thread.receiver),
        diamond=DiamondSummary.model_validate(thread.diamond),
        subject=thread.subject,
        body=thread.body,
        is_read=thread.is_read,
        read_at=thread.read_at,
        reply_count=len(thread.replies),
        created_at=thread.created_at,
        updated_at=thread.updated_at,
    )


def to_thread_detail(thread: Thread) -> ThreadDetailResponse:
    """Project a thread, its diamond grading and every reply."""
    return ThreadDetailResponse.model_validate(thread)
