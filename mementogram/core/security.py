# mementogram/core/security.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from mementogram.core.config import settings
from mementogram.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a plain text password using the configured password hashing context"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify if a plain text password matches its hashed version"""
    return pwd_context.verify(plain_password, hashed_password)


def _secret_key() -> str:
    secret = settings.SECRET_KEY.get_secret_value()
    if not secret:
        logger.error("SECRET_KEY is not configured")
        raise RuntimeError("Authentication configuration error.")
    return secret


def create_access_token(user_id: int, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT carrying the user id and role name"""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"user_id": user_id, "role": role, "exp": expire}
    return jwt.encode(to_encode, _secret_key(), algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a bearer token.

    Raises:
        UnauthorizedError: if the signature, expiry or payload shape is invalid.
    """
    try:
        payload = jwt.decode(token, _secret_key(), algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning(f"Token verification failed: {str(e)}")
        raise UnauthorizedError("Not authorized, token failed verification.")

    if not isinstance(payload.get("user_id"), int) or not isinstance(payload.get("role"), str):
        logger.warning("Token payload is missing user_id or role")
        raise UnauthorizedError("Not authorized, invalid token payload.")
    return payload
