"""Pytest configuration and shared fixtures for Mementogram tests."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-0123456789"
os.environ["ENVIRONMENT"] = "test"

from typing import Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from mementogram import crud, models
from mementogram.api import deps
from mementogram.core import security
from mementogram.db.base import Base
from mementogram.db.session import make_engine
from mementogram.main import app
from mementogram.schemas.post import PostCreate
from mementogram.schemas.user import UserCreate

# Keep bcrypt cheap in tests
security.pwd_context.update(bcrypt__rounds=4)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test, shared across sessions."""
    test_engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    crud.seed_initial_roles(session)
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def client(db, session_factory) -> Generator[TestClient, None, None]:
    """TestClient whose requests use the test database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[deps.get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def make_user(db) -> Callable[..., models.User]:
    def _make_user(username: str, password: str = "secret123", **kwargs) -> models.User:
        return crud.create_user(
            db,
            UserCreate(
                email=f"{username}@example.com",
                username=username,
                password=password,
                **kwargs,
            ),
        )

    return _make_user


@pytest.fixture
def make_post(db) -> Callable[..., models.Post]:
    def _make_post(author: models.User, content: str = "hello world", image_url: str = None) -> models.Post:
        return crud.create_post(db, PostCreate(content=content, image_url=image_url), user_id=author.id)

    return _make_post


@pytest.fixture
def auth_headers() -> Callable[[models.User], Dict[str, str]]:
    def _auth_headers(user: models.User) -> Dict[str, str]:
        token = security.create_access_token(user.id, user.role_name)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def alice(make_user) -> models.User:
    return make_user("alice", full_name="Alice Liddell")


@pytest.fixture
def bob(make_user) -> models.User:
    return make_user("bob", full_name="Bob Builder")


@pytest.fixture
def carol(make_user) -> models.User:
    return make_user("carol")
