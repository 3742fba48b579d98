# mementogram/schemas/post.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from mementogram.schemas.user import Author


class PostBase(BaseModel):
    """Base schema for posts"""
    content: str = Field(..., min_length=1)
    image_url: Optional[str] = None


class PostCreate(PostBase):
    """Schema for creating posts"""
    pass


class PostUpdate(BaseModel):
    """Schema for updating posts. Unset fields are left untouched; image_url may be set to null."""
    content: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = None


class Post(BaseModel):
    """Schema for a stored post row"""
    id: int
    user_id: int
    content: str
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PostWithStats(BaseModel):
    """Post with author and engagement stats, as served by listings and the feed"""
    id: int
    content: str
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    author: Author
    like_count: int = 0
    dislike_count: int = 0
    comment_count: int = 0
    current_user_vote: int = 0
