"""Tests for settings and token handling."""

from datetime import timedelta

import pytest
from sqlalchemy.engine import make_url

from mementogram.core import security
from mementogram.core.config import Settings
from mementogram.core.exceptions import UnauthorizedError


def test_database_url_assembled_from_parts():
    settings = Settings(
        DATABASE_URL=None,
        POSTGRES_SERVER="db.internal",
        POSTGRES_USER="memento",
        POSTGRES_PASSWORD="pw",
        POSTGRES_DB="mementogram",
        POSTGRES_PORT=6543,
    )
    assert settings.DATABASE_URL == "postgresql://memento:pw@db.internal:6543/mementogram"


def test_database_url_escapes_reserved_password_characters():
    settings = Settings(
        DATABASE_URL=None,
        POSTGRES_SERVER="db.internal",
        POSTGRES_USER="memento",
        POSTGRES_PASSWORD="p@ss/word",
        POSTGRES_DB="mementogram",
    )

    url = make_url(settings.DATABASE_URL)

    assert url.host == "db.internal"
    assert url.port == 5432
    assert url.username == "memento"
    assert url.password == "p@ss/word"
    assert url.database == "mementogram"


def test_explicit_database_url_wins():
    settings = Settings(DATABASE_URL="sqlite:///./local.db")
    assert settings.DATABASE_URL == "sqlite:///./local.db"


def test_cors_origins_accept_comma_separated_string():
    settings = Settings(BACKEND_CORS_ORIGINS="http://a.example, http://b.example")
    assert settings.BACKEND_CORS_ORIGINS == ["http://a.example", "http://b.example"]


def test_cors_origins_accept_json_list():
    settings = Settings(BACKEND_CORS_ORIGINS='["http://a.example"]')
    assert settings.BACKEND_CORS_ORIGINS == ["http://a.example"]


def test_defaults():
    settings = Settings()
    assert settings.API_V1_STR == "/api/v1"
    assert settings.DEFAULT_PAGE_SIZE == 20
    assert settings.FEED_FOLLOWING_LIMIT == 1000


def test_password_hash_verifies():
    hashed = security.get_password_hash("hunter22")
    assert security.verify_password("hunter22", hashed)
    assert not security.verify_password("hunter23", hashed)


def test_expired_token_rejected():
    token = security.create_access_token(1, "USER", expires_delta=timedelta(seconds=-5))
    with pytest.raises(UnauthorizedError):
        security.decode_access_token(token)


def test_token_without_user_id_rejected():
    from jose import jwt

    token = jwt.encode({"role": "USER"}, "test-secret-key-0123456789", algorithm="HS256")
    with pytest.raises(UnauthorizedError):
        security.decode_access_token(token)


def test_missing_secret_is_configuration_error(monkeypatch):
    from pydantic import SecretStr

    monkeypatch.setattr(security.settings, "SECRET_KEY", SecretStr(""))
    with pytest.raises(RuntimeError):
        security.create_access_token(1, "USER")
