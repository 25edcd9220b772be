# src/diamond_exchange/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import messages_router

__all__ = [
    "messages_router",
]
