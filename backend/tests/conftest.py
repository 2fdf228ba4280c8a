"""Pytest fixtures: throwaway SQLite database, fake mailer, API helpers."""
import os

# Must be set before roleplay.config is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from roleplay.database import Base, enable_sqlite_foreign_keys, get_db
from roleplay.dependencies import get_mailer
from roleplay.main import app
from roleplay.services.mail_service import Mailer

# Import all models so they register with Base.metadata
from roleplay.models.user import User                                  # noqa: F401
from roleplay.models.api_token import ApiToken                          # noqa: F401
from roleplay.models.password_reset_token import PasswordResetToken     # noqa: F401
from roleplay.models.group import Group, GroupPlayer                    # noqa: F401
from roleplay.models.group_request import GroupRequest                  # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


class FakeMailer(Mailer):
    """Collects messages instead of sending them."""

    def __init__(self):
        self.sent = []

    async def send(self, message):
        self.sent.append(message)

    def find(self, to):
        return next((m for m in self.sent if m.to == to), None)


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    event.listen(engine, "connect", enable_sqlite_foreign_keys)

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session for direct assertions and setup."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def mailer():
    return FakeMailer()


@pytest.fixture(scope="function")
def client(db_engine, mailer):
    """FastAPI TestClient with the database and mailer dependencies overridden."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: drive the API and return response JSON
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, username: str = "tester", email: str | None = None,
                     password: str = "secret") -> dict:
    """Helper: POST /users and return response JSON."""
    resp = client.post("/users", json={
        "email": email or f"{username}@example.com",
        "username": username,
        "password": password,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def login(client: TestClient, email: str, password: str = "secret") -> dict:
    """Helper: POST /sessions and return an Authorization header dict."""
    resp = client.post("/sessions", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']['token']}"}


def create_logged_in_user(client: TestClient, username: str = "tester") -> tuple[dict, dict]:
    """Helper: register a user and sign them in; returns (user, headers)."""
    user = create_test_user(client, username=username)
    return user, login(client, user["email"])


def create_test_group(client: TestClient, headers: dict, master_id: int, name: str = "Test Group",
                      **fields) -> dict:
    """Helper: POST /groups and return the group JSON."""
    payload = {
        "name": name,
        "description": "A weekly campaign",
        "chronic": "Curse of Strahd",
        "location": "Game store",
        "schedule": "Fridays 19h",
        "master": master_id,
    }
    payload.update(fields)
    resp = client.post("/groups", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["group"]
