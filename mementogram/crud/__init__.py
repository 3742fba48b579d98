# mementogram/crud/__init__.py

from .crud_user import (
    seed_initial_roles,
    get_user,
    get_user_by_email,
    get_user_by_username,
    get_user_by_email_or_username,
    create_user,
    authenticate,
    update_user,
    get_public_profile,
)
from .crud_post import (
    create_post,
    get_post,
    get_posts,
    update_post,
    delete_post,
    attach_post_stats,
)
from .crud_like import (
    cast_vote,
    like_post,
    dislike_post,
    get_user_vote_on_post,
    get_vote_counts,
)
from .crud_comment import (
    create_comment,
    get_comments_for_post,
    get_comment_count,
)
from .crud_follow import (
    follow_user,
    unfollow_user,
    is_following,
    get_following,
    get_followers,
    get_follow_counts,
)
from .crud_feed import get_feed_for_user

__all__ = [
    "seed_initial_roles", "get_user", "get_user_by_email", "get_user_by_username",
    "get_user_by_email_or_username", "create_user", "authenticate", "update_user",
    "get_public_profile",
    "create_post", "get_post", "get_posts", "update_post", "delete_post", "attach_post_stats",
    "cast_vote", "like_post", "dislike_post", "get_user_vote_on_post", "get_vote_counts",
    "create_comment", "get_comments_for_post", "get_comment_count",
    "follow_user", "unfollow_user", "is_following", "get_following", "get_followers",
    "get_follow_counts",
    "get_feed_for_user",
]
