# mementogram/api/deps.py

import logging
from typing import Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from mementogram.core.config import settings
from mementogram.core.exceptions import UnauthorizedError
from mementogram.core.security import decode_access_token
from mementogram.db.session import get_db  # noqa: F401  re-exported for endpoints and test overrides
from mementogram.schemas.common import Pagination
from mementogram.schemas.token import TokenPayload

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenPayload:
    """Require a valid bearer token and return the identity it carries"""
    if credentials is None:
        raise UnauthorizedError("Not authorized, no token provided.")
    return TokenPayload(**decode_access_token(credentials.credentials))


def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[TokenPayload]:
    """Anonymous when no token is sent; an invalid token is still rejected"""
    if credentials is None:
        return None
    return TokenPayload(**decode_access_token(credentials.credentials))


def get_pagination(
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
) -> Pagination:
    return Pagination(limit=limit, offset=offset)
