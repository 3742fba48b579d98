from .common import Pagination, Message
from .user import (
    UserCreate,
    UserUpdate,
    Author,
    PublicUserProfile,
    UserProfile,
    User,
    FollowStatus,
)
from .token import LoginRequest, TokenPayload, AuthResponse
from .post import PostCreate, PostUpdate, Post, PostWithStats
from .like import VoteResult, VoteCounts
from .comment import CommentCreate, Comment, CommentCount

__all__ = [
    "Pagination", "Message",
    "UserCreate", "UserUpdate", "Author", "PublicUserProfile", "UserProfile", "User", "FollowStatus",
    "LoginRequest", "TokenPayload", "AuthResponse",
    "PostCreate", "PostUpdate", "Post", "PostWithStats",
    "VoteResult", "VoteCounts",
    "CommentCreate", "Comment", "CommentCount",
]
