"""Models describing inquiry threads between buyers and sellers."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from diamond_exchange.db.session import Base
from diamond_exchange.db.time import UTCDateTime, utcnow
from diamond_exchange.models.diamond import Diamond
from diamond_exchange.models.user import User

SUBJECT_MAX_LENGTH = 200
BODY_MAX_LENGTH = 2000


class Thread(Base):
    """One inquiry about a diamond, with the replies exchanged since.

    Sender, receiver and diamond never change after creation. ``is_read``
    only moves from false to true.
    """

    __tablename__ = "message"
    __table_args__ = (
        Index("ix_message_receiver_created", "receiver_id", "created_at"),
        Index("ix_message_sender_created", "sender_id", "created_at"),
        Index("ix_message_diamond", "diamond_id"),
        Index("ix_message_is_read", "is_read"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    sender_id: Mapped[int] = mapped_column(Integer, ForeignKey("user_account.id"), nullable=False)
    receiver_id: Mapped[int] = mapped_column(Integer, ForeignKey("user_account.id"), nullable=False)
    diamond_id: Mapped[int] = mapped_column(Integer, ForeignKey("diamond.id"), nullable=False)

    subject: Mapped[str] = mapped_column(String(SUBJECT_MAX_LENGTH), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    read_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)

    sender: Mapped[User] = relationship("User", foreign_keys=[sender_id], lazy="joined")
    receiver: Mapped[User] = relationship("User", foreign_keys=[receiver_id], lazy="joined")
    diamond: Mapped[Diamond] = relationship("Diamond", lazy="joined")

    replies: Mapped[list[ThreadReply]] = relationship(
        "ThreadReply",
        back_populates="thread",
        order_by="ThreadReply.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class ThreadReply(Base):
    """A reply appended to a thread by one of its two participants.

    Rows are insert-only; the autoincrement id records acceptance order.
    """

    __tablename__ = "message_reply"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    message_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("message.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[int] = mapped_column(Integer, ForeignKey("user_account.id"), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    sent_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)

    thread: Mapped[Thread] = relationship("Thread", back_populates="replies")
    sender: Mapped[User] = relationship("User", lazy="joined")
