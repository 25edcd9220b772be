"""Data access helpers for working with inquiry threads."""
from __future__ import annotations

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.orm import Session

from diamond_exchange.db.time import utcnow
from diamond_exchange.models.diamond import Diamond
from diamond_exchange.models.thread import Thread, ThreadReply
from diamond_exchange.models.user import User

__all__ = ["ThreadRepository"]


class ThreadRepository:
    """Thin wrapper around database access for thread entities.

    Methods flush but never commit; the service owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, thread_id: int, *, fresh: bool = False) -> Thread | None:
        """Return a thread by identifier.

        With ``fresh`` set, attributes and replies already held by the session
        are overwritten with the stored state.
        """
        stmt = select(Thread).where(Thread.id == thread_id)
        if fresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = self.session.execute(stmt)
        return result.scalars().unique().first()

    def user_exists(self, user_id: int) -> bool:
        return self.session.get(User, user_id) is not None

    def diamond_exists(self, diamond_id: int) -> bool:
        return self.session.get(Diamond, diamond_id) is not None

    def create(
        self,
        *,
        sender_id: int,
        receiver_id: int,
        diamond_id: int,
        subject: str,
        body: str,
    ) -> Thread:
        """Insert a new unread thread and return the persisted ORM instance."""
        thread = Thread(
            sender_id=sender_id,
            receiver_id=receiver_id,
            diamond_id=diamond_id,
            subject=subject,
            body=body,
            is_read=False,
        )
        self.session.add(thread)
        self.session.flush()
        return thread

    def list_for_receiver(
        self,
        receiver_id: int,
        *,
        offset: int,
        limit: int,
        unread_only: bool = False,
    ) -> list[Thread]:
        """Return inbox threads, newest first."""
        stmt = select(Thread).where(Thread.receiver_id == receiver_id)
        if unread_only:
            stmt = stmt.where(Thread.is_read.is_(False))
        stmt = stmt.order_by(Thread.created_at.desc(), Thread.id.desc()).offset(offset).limit(limit)
        return list(self.session.execute(stmt).scalars().unique())

    def list_for_sender(self, sender_id: int, *, offset: int, limit: int) -> list[Thread]:
        """Return sent threads, newest first."""
        stmt = (
            select(Thread)
            .where(Thread.sender_id == sender_id)
            .order_by(Thread.created_at.desc(), Thread.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars().unique())

    def count_for_receiver(self, receiver_id: int, *, unread_only: bool = False) -> int:
        stmt = select(func.count()).select_from(Thread).where(Thread.receiver_id == receiver_id)
        if unread_only:
            stmt = stmt.where(Thread.is_read.is_(False))
        return int(self.session.execute(stmt).scalar() or 0)

    def count_for_sender(self, sender_id: int) -> int:
        stmt = select(func.count()).select_from(Thread).where(Thread.sender_id == sender_id)
        return int(self.session.execute(stmt).scalar() or 0)

    def append_reply(self, thread_id: int, *, sender_id: int, body: str) -> int:
        """Append a reply with a single INSERT and return the new reply id.

        The thread row is never rewritten as a whole, so concurrent repliers
        cannot overwrite each other's entries.
        """
        now = utcnow()
        result = self.session.execute(
            insert(ThreadReply.__table__).values(
                message_id=thread_id,
                sender_id=sender_id,
                body=body,
                sent_at=now,
            )
        )
        self.session.execute(
            update(Thread).where(Thread.id == thread_id).values(updated_at=now)
        )
        return int(result.inserted_primary_key[0])

    def mark_read(self, thread_id: int) -> bool:
        """Flip ``is_read`` if it is still false. Returns True if this call flipped it."""
        result = self.session.execute(
            update(Thread)
            .where(Thread.id == thread_id, Thread.is_read.is_(False))
            .values(is_read=True, read_at=utcnow())
        )
        return result.rowcount > 0

    def delete(self, thread_id: int) -> None:
        """Remove a thread and all of its replies."""
        self.session.execute(delete(ThreadReply).where(ThreadReply.message_id == thread_id))
        self.session.execute(delete(Thread).where(Thread.id == thread_id))
