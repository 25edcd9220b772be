"""JWT helpers for bearer authentication."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import jwt

from diamond_exchange.core.settings import settings


def create_access_token(
    user_id: int | str,
    extra_claims: dict[str, str] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token whose subject is the user id."""
    to_encode: dict[str, object] = {"sub": str(user_id)}
    if extra_claims:
        to_encode.update(extra_claims)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = datetime.now(UTC) + expires_delta
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, object]:
    """Decode and verify a JWT access token.

    Raises:
        jose.JWTError: If the token is malformed, expired or badly signed.
    """
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
    )
