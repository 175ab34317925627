"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# Ensure a valid JWT_SECRET is always set for test runs.
# This must happen before any import of momentum.api.deps which validates
# the secret at module-load time.
# ---------------------------------------------------------------------------
_TEST_JWT_SECRET = "test-secret-for-pytest-only-" + "x" * 40  # > 32 chars
os.environ.setdefault("JWT_SECRET", _TEST_JWT_SECRET)

import pytest  # noqa: E402
from sqlalchemy import Engine, create_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from momentum.config import MomentumConfig  # noqa: E402
from momentum.database.models import Base  # noqa: E402
from momentum.services.tracker import FitnessTracker  # noqa: E402

PASSWORD = "correct-horse-battery"


@pytest.fixture
def db_engine() -> Engine:
    """In-memory SQLite engine with all Momentum tables.

    StaticPool keeps one shared connection so every thread (TestClient runs
    sync endpoints on a worker thread) sees the same database.
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine: Engine):
    """A bare session for service-level tests; rolled back afterwards."""
    with Session(db_engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def tracker(db_engine: Engine) -> FitnessTracker:
    return FitnessTracker(db_engine)


@pytest.fixture
def config() -> MomentumConfig:
    return MomentumConfig(login_max_attempts=3, login_window_seconds=60)


@pytest.fixture
def client(db_engine, tracker, config):
    """FastAPI TestClient wired to the in-memory database."""
    from fastapi.testclient import TestClient

    from momentum.api.deps import get_config, get_engine, get_tracker
    from momentum.api.main import app

    app.dependency_overrides[get_engine] = lambda: db_engine
    app.dependency_overrides[get_tracker] = lambda: tracker
    app.dependency_overrides[get_config] = lambda: config
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def make_token(user_id: str) -> str:
    """Bearer token for *user_id*.  Usable from any test module."""
    from momentum.api.deps import create_access_token

    return create_access_token(user_id, ttl_hours=1)


def auth(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}
