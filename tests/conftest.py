"""Shared fixtures: a throwaway SQLite database and authenticated test clients."""
from __future__ import annotations

import os
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_proconnect.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-proconnect")

from proconnect.database import Base, SessionLocal, engine  # noqa: E402
from proconnect.main import app  # noqa: E402
from proconnect.models import Connection, Conversation, Message, User  # noqa: E402
from proconnect.services import get_current_user, respond_to_request, send_connection_request  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _create_schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_database() -> Iterator[None]:
    with SessionLocal() as session:
        session.execute(delete(Message))
        session.execute(delete(Conversation))
        session.execute(delete(Connection))
        session.execute(delete(User))
        session.commit()
    yield


@pytest.fixture
def db() -> Iterator:
    with SessionLocal() as session:
        yield session


@pytest.fixture
def user_factory() -> Callable[..., User]:
    def _factory(username: str, full_name: str | None = None) -> User:
        with SessionLocal() as session:
            user = User(
                username=username,
                email=f"{username}@proconnect.dev",
                full_name=full_name or username.replace("-", " ").title(),
                hashed_password="test-hash",
                skills=[],
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    return _factory


@pytest.fixture
def connect() -> Callable[[User, User], Connection]:
    """Create an accepted connection from ``requester`` to ``recipient``."""

    def _connect(requester: User, recipient: User) -> Connection:
        with SessionLocal() as session:
            pending = send_connection_request(session, requester=requester, recipient_id=recipient.id, message=None)
            return respond_to_request(session, connection_id=pending.id, responder=recipient, decision="accepted")

    return _connect


@pytest.fixture
def authed_client() -> Iterator[Callable[[User], TestClient]]:
    with TestClient(app) as client:
        def _with_user(user: User) -> TestClient:
            def _override() -> User:
                return user

            app.dependency_overrides[get_current_user] = _override
            return client

        yield _with_user
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client() -> Iterator[TestClient]:
    app.dependency_overrides.clear()
    with TestClient(app) as client:
        yield client
