"""SQLAlchemy models for the Diamond Exchange application."""

from .diamond import Diamond
from .thread import Thread, ThreadReply
from .user import User

__all__ = [
    "Diamond",
    "Thread", "ThreadReply",
    "User",
]
