# mementogram/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    """Registration payload"""
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=30)
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = None


class UserUpdate(BaseModel):
    """Sparse profile patch. Only fields sent by the client are applied."""
    full_name: Optional[str] = None
    bio: Optional[str] = None
    username: Optional[str] = Field(default=None, min_length=3, max_length=30)
    profile_pic_url: Optional[str] = None


class Author(BaseModel):
    """Author fields embedded in posts and comments"""
    id: int
    username: str
    full_name: Optional[str] = None
    profile_pic_url: Optional[str] = None

    class Config:
        from_attributes = True


class PublicUserProfile(BaseModel):
    id: int
    username: str
    full_name: Optional[str] = None
    bio: Optional[str] = None
    profile_pic_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UserProfile(PublicUserProfile):
    follower_count: int = 0
    following_count: int = 0


class User(BaseModel):
    """The logged-in user's own profile"""
    id: int
    email: EmailStr
    username: str
    full_name: Optional[str] = None
    bio: Optional[str] = None
    profile_pic_url: Optional[str] = None
    role_name: str
    email_verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class FollowStatus(BaseModel):
    user_id: int
    is_following: bool
