"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from diamond_exchange.core.security import decode_access_token
from diamond_exchange.db.session import get_db
from diamond_exchange.models import User
from diamond_exchange.schemas.common import MAX_ID
from diamond_exchange.services.thread_service import ThreadService

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _credentials_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _decode_user_id(subject: object) -> int:
    """Parse the token subject into a user id.

    Raises:
        HTTPException: If the subject is not an integer id
    """
    try:
        user_id = int(str(subject))
    except ValueError as err:
        raise _credentials_error() from err
    if not 1 <= user_id <= MAX_ID:
        raise _credentials_error()
    return user_id


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise _credentials_error() from err

    subject = payload.get("sub")
    if subject is None:
        raise _credentials_error()

    user = db.get(User, _decode_user_id(subject))
    if user is None:
        raise _credentials_error()
    return user


def get_thread_service(db: SessionDep) -> ThreadService:
    """Return a thread service bound to the request session."""
    return ThreadService(db)


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
ThreadServiceDep = Annotated[ThreadService, Depends(get_thread_service)]
