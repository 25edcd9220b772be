"""Business logic services for the Diamond Exchange application."""

from .access import ensure_participant, ensure_receiver, is_participant
from .thread_service import ThreadPage, ThreadService

__all__ = [
    "ThreadPage",
    "ThreadService",
    "ensure_participant",
    "ensure_receiver",
    "is_participant",
]
