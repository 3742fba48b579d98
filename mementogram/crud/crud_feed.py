# mementogram/crud/crud_feed.py

import logging
from typing import List

from sqlalchemy.orm import Session

from mementogram.core.config import settings
from mementogram.crud import crud_follow, crud_post
from mementogram.models.post import Post

logger = logging.getLogger(__name__)


def get_feed_for_user(db: Session, user_id: int, skip: int = 0, limit: int = 20) -> List[dict]:
    """
    Build a user's feed: their own posts plus posts by everyone they follow.

    Args:
        db: Database session
        user_id: ID of the user requesting the feed
        skip: Number of posts to skip
        limit: Maximum number of posts to return

    Returns:
        List[dict]: Posts newest first, each with author, like/dislike/comment
        counts and the requesting user's vote
    """
    following = crud_follow.get_following(db, user_id, limit=settings.FEED_FOLLOWING_LIMIT)
    author_ids = {user_id} | {user.id for user in following}

    rows = crud_post.post_with_author_query(db)\
        .filter(Post.user_id.in_(author_ids))\
        .offset(skip)\
        .limit(limit)\
        .all()
    logger.info(
        f"Feed for user {user_id}: {len(rows)} posts from {len(author_ids)} authors "
        f"(skip={skip}, limit={limit})"
    )
    if not rows:
        return []

    return crud_post.attach_post_stats(db, rows, current_user_id=user_id)
