"""inquiry threads

Revision ID: 0001_inquiry_threads
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_inquiry_threads"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create accounts, listings, threads and replies."""
    op.create_table(
        "user_account",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "diamond",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("seller_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("price", sa.Numeric(14, 2), nullable=False),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("carat", sa.Numeric(6, 2), nullable=True),
        sa.Column("cut", sa.String(length=40), nullable=True),
        sa.Column("color", sa.String(length=10), nullable=True),
        sa.Column("clarity", sa.String(length=10), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["seller_id"], ["user_account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "message",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sender_id", sa.Integer(), nullable=False),
        sa.Column("receiver_id", sa.Integer(), nullable=False),
        sa.Column("diamond_id", sa.Integer(), nullable=False),
        sa.Column("subject", sa.String(length=200), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["diamond_id"], ["diamond.id"]),
        sa.ForeignKeyConstraint(["receiver_id"], ["user_account.id"]),
        sa.ForeignKeyConstraint(["sender_id"], ["user_account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_message_receiver_created", "message", ["receiver_id", "created_at"])
    op.create_index("ix_message_sender_created", "message", ["sender_id", "created_at"])
    op.create_index("ix_message_diamond", "message", ["diamond_id"])
    op.create_index("ix_message_is_read", "message", ["is_read"])
    op.create_table(
        "message_reply",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("message_id", sa.Integer(), nullable=False),
        sa.Column("sender_id", sa.Integer(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["message_id"], ["message.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sender_id"], ["user_account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_message_reply_message_id", "message_reply", ["message_id"])


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index("ix_message_reply_message_id", table_name="message_reply")
    op.drop_table("message_reply")
    op.drop_index("ix_message_is_read", table_name="message")
    op.drop_index("ix_message_diamond", table_name="message")
    op.drop_index("ix_message_sender_created", table_name="message")
    op.drop_index("ix_message_receiver_created", table_name="message")
    op.drop_table("message")
    op.drop_table("diamond")
    op.drop_table("user_account")
