# mementogram/schemas/token.py

from pydantic import BaseModel

from mementogram.schemas.user import User


class LoginRequest(BaseModel):
    email_or_username: str
    password: str


class TokenPayload(BaseModel):
    """Request-scoped identity decoded from the bearer token"""
    user_id: int
    role: str


class AuthResponse(BaseModel):
    message: str
    user: User
    token: str
