"""Shared fixtures: per-test SQLite database, seeded roles, API client."""

import os
import tempfile

# Settings are read once at import; set test values before importing catalog.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256-signing")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DB_INIT_MODE", "create_all")
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "catalog-tests.log"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from catalog.core.database import Base, engine_options, get_db
from catalog.main import app
from catalog.models.role import RoleName
from catalog.services.auth_service import auth_service
from catalog.services.role_service import role_service
from catalog.services.user_service import user_service


@pytest.fixture
def session_factory(tmp_path):
    url = f"sqlite:///{tmp_path / 'catalog.db'}"
    engine = create_engine(url, **engine_options(url))
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    role_service.seed_roles(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory, db):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Create a user directly in the store; returns the User row."""
    def _make(username="bob", password="pw12345", email=None, roles=(RoleName.USER,)):
        return user_service.create_user(
            db,
            username,
            email or f"{username}@example.com",
            password,
            role_service.get_roles(db, roles),
        )
    return _make


@pytest.fixture
def register(db):
    """Register through the orchestrator, as the /register route does."""
    def _register(username, password="pw12345", email=None, roles=None):
        auth_service.register(db, username, email or f"{username}@example.com", password, roles)
    return _register
