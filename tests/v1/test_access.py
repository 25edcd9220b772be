# tests/v1/test_access.py
"""Tests for the participant guard."""

import pytest

from diamond_exchange.core.errors import AccessDeniedError
from diamond_exchange.models import Thread
from diamond_exchange.services.access import ensure_participant, ensure_receiver, is_participant


@pytest.fixture()
def detached_thread() -> Thread:
    return Thread(id=1, sender_id=10, receiver_id=20, diamond_id=5, subject="s", body="b")


def test_is_participant(detached_thread):
    assert is_participant(detached_thread, 10)
    assert is_participant(detached_thread, 20)
    assert not is_participant(detached_thread, 30)


def test_ensure_participant(detached_thread):
    ensure_participant(detached_thread, 10, "view this message")
    ensure_participant(detached_thread, 20, "view this message")

    with pytest.raises(AccessDeniedError) as exc_info:
        ensure_participant(detached_thread, 30, "delete this message")
    assert exc_info.value.message == "You are not authorized to delete this message"
    assert exc_info.value.status_code == 403


def test_ensure_receiver(detached_thread):
    ensure_receiver(detached_thread, 20, "mark this message as read")

    for caller in (10, 30):
        with pytest.raises(AccessDeniedError):
            ensure_receiver(detached_thread, caller, "mark this message as read")
