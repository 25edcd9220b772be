"""SQLAlchemy model for marketplace accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from diamond_exchange.db.session import Base
from diamond_exchange.db.time import UTCDateTime, utcnow


class User(Base):
    """Buyer or seller account.

    Only the fields the messaging subsystem projects are stored here; the
    wider profile lives with the user directory.
    """

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow)
