# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from decimal import Decimal
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from diamond_exchange.core.security import create_access_token  # noqa: E402
from diamond_exchange.db.session import Base  # noqa: E402
from diamond_exchange.db.session import get_db as app_get_session  # noqa: E402
from diamond_exchange.main import app as fastapi_app  # noqa: E402
from diamond_exchange.models import Diamond, Thread, User  # noqa: E402
from diamond_exchange.services.thread_service import ThreadService  # noqa: E402

TEST_DB_URL = "sqlite://"

_EMAIL_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[[str], User]:
    """Return a factory that persists a user with a unique email."""

    def _make(name: str) -> User:
        user = User(name=name, email=f"user{next(_EMAIL_COUNTER)}@example.com")
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture()
def buyer(make_user: Callable[[str], User]) -> User:
    return make_user("Buyer")


@pytest.fixture()
def seller(make_user: Callable[[str], User]) -> User:
    return make_user("Seller")


@pytest.fixture()
def outsider(make_user: Callable[[str], User]) -> User:
    return make_user("Outsider")


@pytest.fixture()
def diamond(db_session: Session, seller: User) -> Diamond:
    """Create a graded listing owned by the seller."""
    listing = Diamond(
        seller_id=seller.id,
        name="Round Brilliant 1.01ct",
        price=Decimal("7450.00"),
        image="https://cdn.example.com/diamonds/1.jpg",
        carat=Decimal("1.01"),
        cut="Excellent",
        color="F",
        clarity="VS1",
    )
    db_session.add(listing)
    db_session.commit()
    db_session.refresh(listing)
    return listing


@pytest.fixture()
def service(db_session: Session) -> ThreadService:
    return ThreadService(db_session)


@pytest.fixture()
def thread(service: ThreadService, buyer: User, seller: User, diamond: Diamond) -> Thread:
    """An unread inquiry from the buyer to the seller."""
    return service.send(buyer.id, seller.id, diamond.id, "Interested", "Tell me more")


def _auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def buyer_auth(buyer: User) -> dict[str, str]:
    """Return authorization headers for the buyer."""
    return _auth_headers(buyer)


@pytest.fixture()
def seller_auth(seller: User) -> dict[str, str]:
    """Return authorization headers for the seller."""
    return _auth_headers(seller)


@pytest.fixture()
def outsider_auth(outsider: User) -> dict[str, str]:
    """Return authorization headers for a user outside the thread."""
    return _auth_headers(outsider)
