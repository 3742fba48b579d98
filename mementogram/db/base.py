# mementogram/db/base.py
# Import every model so Base.metadata knows all tables before create_all

from mementogram.db.base_class import Base
from mementogram.models.user import Role, User
from mementogram.models.post import Post
from mementogram.models.like import Like
from mementogram.models.comment import Comment
from mementogram.models.follow import Follow

__all__ = ["Base", "Role", "User", "Post", "Like", "Comment", "Follow"]
