# mementogram/crud/crud_like.py

import logging
from typing import Dict, Iterable, Optional, Tuple

from sqlalchemy import case, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mementogram.core.exceptions import ConflictError, NotFoundError
from mementogram.models.like import DISLIKE, LIKE, NO_VOTE, Like
from mementogram.models.post import Post

logger = logging.getLogger(__name__)


def get_vote(db: Session, user_id: int, post_id: int) -> Optional[Like]:
    return db.query(Like).filter(
        Like.user_id == user_id,
        Like.post_id == post_id
    ).first()


def cast_vote(db: Session, user_id: int, post_id: int, vote_type: int) -> int:
    """
    Cast, switch or remove a user's vote on a post.

    Voting the same way twice removes the vote; voting the other way
    overwrites it in place.

    Args:
        db: Database session
        user_id: ID of the voting user
        post_id: ID of the post
        vote_type: 1 for like, -1 for dislike

    Returns:
        int: The resulting vote status (1, -1 or 0)

    Raises:
        NotFoundError: if the post does not exist
        ConflictError: if a concurrent request inserted the same vote first
    """
    if vote_type not in (LIKE, DISLIKE):
        raise ValueError(f"Invalid vote type: {vote_type}")

    if db.query(Post.id).filter(Post.id == post_id).first() is None:
        logger.warning(f"Vote on missing post {post_id} by user {user_id}")
        raise NotFoundError(f"Post with ID {post_id} not found.")

    current_vote = get_vote(db, user_id, post_id)

    try:
        if current_vote is None:
            db.add(Like(user_id=user_id, post_id=post_id, vote_type=vote_type))
            db.commit()
            logger.info(f"Vote added ({vote_type}) for user {user_id} on post {post_id}")
            return vote_type

        if current_vote.vote_type == vote_type:
            db.delete(current_vote)
            db.commit()
            logger.info(f"Vote removed for user {user_id} on post {post_id}")
            return NO_VOTE

        current_vote.vote_type = vote_type
        current_vote.created_at = func.now()
        db.commit()
        logger.info(f"Vote switched to {vote_type} for user {user_id} on post {post_id}")
        return vote_type
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Concurrent vote for user {user_id} on post {post_id}: {str(e)}")
        raise ConflictError("Vote already recorded for this post.")
    except Exception as e:
        db.rollback()
        logger.error(f"Error voting on post {post_id}: {str(e)}", exc_info=True)
        raise


def like_post(db: Session, user_id: int, post_id: int) -> int:
    """Like a post, or remove the like if already liked"""
    return cast_vote(db, user_id, post_id, LIKE)


def dislike_post(db: Session, user_id: int, post_id: int) -> int:
    """Dislike a post, or remove the dislike if already disliked"""
    return cast_vote(db, user_id, post_id, DISLIKE)


def get_user_vote_on_post(db: Session, user_id: Optional[int], post_id: int) -> int:
    """Return the user's vote on a post, 0 for anonymous users or no vote"""
    if not user_id:
        return NO_VOTE
    vote_type = db.query(Like.vote_type).filter(
        Like.user_id == user_id,
        Like.post_id == post_id
    ).scalar()
    return vote_type or NO_VOTE


def get_vote_counts(db: Session, post_id: int) -> Dict[str, int]:
    """
    Get the like and dislike counts for a post in one aggregate query

    Returns:
        dict: {"like_count": int, "dislike_count": int}
    """
    like_count, dislike_count = db.query(
        func.coalesce(func.sum(case((Like.vote_type == LIKE, 1), else_=0)), 0),
        func.coalesce(func.sum(case((Like.vote_type == DISLIKE, 1), else_=0)), 0),
    ).filter(Like.post_id == post_id).one()
    return {"like_count": int(like_count), "dislike_count": int(dislike_count)}


def get_vote_counts_for_posts(db: Session, post_ids: Iterable[int]) -> Dict[int, Tuple[int, int]]:
    """Map post id -> (like_count, dislike_count) for a batch of posts"""
    post_ids = list(post_ids)
    if not post_ids:
        return {}
    rows = db.query(
        Like.post_id,
        func.sum(case((Like.vote_type == LIKE, 1), else_=0)),
        func.sum(case((Like.vote_type == DISLIKE, 1), else_=0)),
    ).filter(Like.post_id.in_(post_ids))\
     .group_by(Like.post_id)\
     .all()
    return {post_id: (int(likes or 0), int(dislikes or 0)) for post_id, likes, dislikes in rows}


def get_user_votes_for_posts(db: Session, user_id: Optional[int], post_ids: Iterable[int]) -> Dict[int, int]:
    """Map post id -> the user's vote for a batch of posts. Posts without a vote are absent."""
    post_ids = list(post_ids)
    if not user_id or not post_ids:
        return {}
    rows = db.query(Like.post_id, Like.vote_type)\
             .filter(Like.user_id == user_id, Like.post_id.in_(post_ids))\
             .all()
    return {post_id: vote_type for post_id, vote_type in rows}
