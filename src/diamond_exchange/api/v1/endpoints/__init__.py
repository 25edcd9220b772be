# src/diamond_exchange/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .messages import router as messages_router

__all__ = [
    "messages_router",
]
