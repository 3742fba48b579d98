# mementogram/crud/crud_follow.py

import logging
from typing import Dict, List

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mementogram.core.exceptions import BadRequestError, ConflictError, NotFoundError
from mementogram.models.follow import Follow
from mementogram.models.user import User

logger = logging.getLogger(__name__)


def follow_user(db: Session, follower_id: int, following_id: int) -> Follow:
    """
    Create a follow edge from follower_id to following_id.

    Raises:
        BadRequestError: on self-follow
        NotFoundError: if the user to follow does not exist
        ConflictError: if the edge already exists
    """
    if follower_id == following_id:
        raise BadRequestError("You cannot follow yourself.")

    if db.query(User.id).filter(User.id == following_id).first() is None:
        logger.warning(f"User {follower_id} tried to follow missing user {following_id}")
        raise NotFoundError("User to follow not found.")

    if is_following(db, follower_id, following_id):
        raise ConflictError("Already following this user.")

    try:
        db_follow = Follow(follower_id=follower_id, following_id=following_id)
        db.add(db_follow)
        db.commit()
        db.refresh(db_follow)
        logger.info(f"User {follower_id} now follows user {following_id}")
        return db_follow
    except IntegrityError as e:
        # Lost a race with an identical request; the primary key rejected the duplicate
        db.rollback()
        logger.warning(f"IntegrityError following user {following_id}: {str(e)}")
        raise ConflictError("Already following this user.")
    except Exception as e:
        db.rollback()
        logger.error(f"Error following user {following_id}: {str(e)}", exc_info=True)
        raise


def unfollow_user(db: Session, follower_id: int, following_id: int) -> None:
    """
    Remove the follow edge from follower_id to following_id.

    Raises:
        NotFoundError: if the edge does not exist
    """
    try:
        deleted = db.query(Follow).filter(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id
        ).delete(synchronize_session=False)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error unfollowing user {following_id}: {str(e)}", exc_info=True)
        raise

    if deleted == 0:
        raise NotFoundError("Not following this user.")
    logger.info(f"User {follower_id} unfollowed user {following_id}")


def is_following(db: Session, follower_id: int, following_id: int) -> bool:
    """Check if a user is following another user"""
    return db.query(Follow).filter(
        Follow.follower_id == follower_id,
        Follow.following_id == following_id
    ).first() is not None


def get_following(db: Session, user_id: int, skip: int = 0, limit: int = 20) -> List[User]:
    """Users that user_id follows, most recently followed first"""
    return db.query(User)\
             .join(Follow, User.id == Follow.following_id)\
             .filter(Follow.follower_id == user_id)\
             .order_by(desc(Follow.created_at), desc(User.id))\
             .offset(skip)\
             .limit(limit)\
             .all()


def get_followers(db: Session, user_id: int, skip: int = 0, limit: int = 20) -> List[User]:
    """Users following user_id, most recent followers first"""
    return db.query(User)\
             .join(Follow, User.id == Follow.follower_id)\
             .filter(Follow.following_id == user_id)\
             .order_by(desc(Follow.created_at), desc(User.id))\
             .offset(skip)\
             .limit(limit)\
             .all()


def get_follow_counts(db: Session, user_id: int) -> Dict[str, int]:
    following_count = db.query(Follow).filter(Follow.follower_id == user_id).count()
    follower_count = db.query(Follow).filter(Follow.following_id == user_id).count()
    return {"follower_count": follower_count, "following_count": following_count}
