"""Repositories wrapping database access."""

from .thread_repo import ThreadRepository

__all__ = ["ThreadRepository"]
