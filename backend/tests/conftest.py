"""
conftest.py for backend/tests/

Points the app at an in-memory SQLite database before anything imports
core.config, then provides per-test schema, session, HTTP client and user
factory fixtures.

Run from the project root:
    cd backend
    pytest tests -v
"""

import os
import sys

_backend_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _backend_dir not in sys.path:
    sys.path.insert(0, _backend_dir)

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.dependencies import get_db
from api.main import app
from core.security import generate_api_key
from db.database import Base
from db.models import User


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
def engine():
    # StaticPool: every connection is the same in-memory database
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest.fixture
def client(db_session):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@pytest.fixture
def make_user(db_session):
    """Factory: make_user(email, role="user", **columns) -> (User, plain_api_key)."""

    def _make(email, role="user", **columns):
        key = generate_api_key()
        columns.setdefault("sign_in_count", 0)
        user = User(email=email, role=role, api_key_hash=key.hashed, **columns)
        db_session.add(user)
        db_session.commit()
        return user, key.plain

    return _make


@pytest.fixture
def admin_headers(make_user):
    _, key = make_user("admin@example.com", role="admin")
    return {"X-API-Key": key}


@pytest.fixture
def user_headers(make_user):
    _, key = make_user("member@example.com", role="user")
    return {"X-API-Key": key}
