# mementogram/schemas/comment.py

from datetime import datetime

from pydantic import BaseModel

from mementogram.schemas.user import Author


class CommentCreate(BaseModel):
    content: str


class Comment(BaseModel):
    id: int
    post_id: int
    content: str
    created_at: datetime
    updated_at: datetime
    author: Author

    class Config:
        from_attributes = True


class CommentCount(BaseModel):
    post_id: int
    comment_count: int
