"""Participant checks guarding every thread operation."""
from __future__ import annotations

from diamond_exchange.core.errors import AccessDeniedError
from diamond_exchange.models.thread import Thread

__all__ = ["is_participant", "ensure_participant", "ensure_receiver"]


def is_participant(thread: Thread, user_id: int) -> bool:
    """Return True if ``user_id`` is the sender or receiver of ``thread``."""
    return user_id in (thread.sender_id, thread.receiver_id)


def ensure_participant(thread: Thread, user_id: int, action: str) -> None:
    """Raise ``AccessDeniedError`` unless the caller is a participant.

    Args:
        thread: Thread being accessed.
        user_id: Authenticated caller.
        action: Phrase completing the error message, e.g. ``"view this message"``.
    """
    if not is_participant(thread, user_id):
        raise AccessDeniedError(f"You are not authorized to {action}")


def ensure_receiver(thread: Thread, user_id: int, action: str) -> None:
    """Raise ``AccessDeniedError`` unless the caller received the thread."""
    if thread.receiver_id != user_id:
        raise AccessDeniedError(f"You are not authorized to {action}")
