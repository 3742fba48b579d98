from mementogram.models.user import Role, User
from mementogram.models.post import Post
from mementogram.models.like import Like
from mementogram.models.comment import Comment
from mementogram.models.follow import Follow

__all__ = [
    "Role",
    "User",
    "Post",
    "Like",
    "Comment",
    "Follow",
]
