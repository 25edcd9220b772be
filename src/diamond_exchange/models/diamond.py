"""SQLAlchemy model for diamond listings."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from diamond_exchange.db.session import Base
from diamond_exchange.db.time import UTCDateTime, utcnow


class Diamond(Base):
    """A listing a buyer can send an inquiry about."""

    __tablename__ = "diamond"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    seller_id: Mapped[int] = mapped_column(Integer, ForeignKey("user_account.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Grading attributes shown in the thread detail view.
    carat: Mapped[Decimal | None] = mapped_column(Numeric(6, 2), nullable=True)
    cut: Mapped[str | None] = mapped_column(String(40), nullable=True)
    color: Mapped[str | None] = mapped_column(String(10), nullable=True)
    clarity: Mapped[str | None] = mapped_column(String(10), nullable=True)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow)
