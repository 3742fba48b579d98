# mementogram/crud/crud_comment.py

import logging
from typing import Dict, Iterable, List

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from mementogram.core.exceptions import BadRequestError, NotFoundError
from mementogram.models.comment import Comment
from mementogram.models.post import Post
from mementogram.models.user import User

logger = logging.getLogger(__name__)


def _comment_query(db: Session):
    return db.query(Comment, User).join(User, Comment.user_id == User.id)


def _to_output(comment: Comment, author: User) -> dict:
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "content": comment.content,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
        "author": {
            "id": author.id,
            "username": author.username,
            "full_name": author.full_name,
            "profile_pic_url": author.profile_pic_url,
        },
    }


def create_comment(db: Session, post_id: int, user_id: int, content: str) -> dict:
    """
    Create a comment on a post and return it with its author's public fields

    Raises:
        BadRequestError: if content is empty after trimming
        NotFoundError: if the post does not exist
    """
    content = (content or "").strip()
    if not content:
        raise BadRequestError("Comment content cannot be empty.")

    if db.query(Post.id).filter(Post.id == post_id).first() is None:
        logger.warning(f"Comment on missing post {post_id} by user {user_id}")
        raise NotFoundError(f"Post with ID {post_id} not found.")

    try:
        db_comment = Comment(post_id=post_id, user_id=user_id, content=content)
        db.add(db_comment)
        db.commit()
        db.refresh(db_comment)
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating comment on post {post_id}: {str(e)}", exc_info=True)
        raise
    logger.info(f"Comment {db_comment.id} created on post {post_id} by user {user_id}")

    comment, author = _comment_query(db).filter(Comment.id == db_comment.id).one()
    return _to_output(comment, author)


def get_comments_for_post(db: Session, post_id: int, skip: int = 0, limit: int = 20) -> List[dict]:
    """Get comments for a post, newest first, with author details"""
    rows = _comment_query(db)\
        .filter(Comment.post_id == post_id)\
        .order_by(desc(Comment.created_at), desc(Comment.id))\
        .offset(skip)\
        .limit(limit)\
        .all()
    return [_to_output(comment, author) for comment, author in rows]


def get_comment_count(db: Session, post_id: int) -> int:
    """Get the total number of comments for a post"""
    return db.query(Comment).filter(Comment.post_id == post_id).count()


def get_comment_counts_for_posts(db: Session, post_ids: Iterable[int]) -> Dict[int, int]:
    """Map post id -> comment count for a batch of posts. Posts without comments are absent."""
    post_ids = list(post_ids)
    if not post_ids:
        return {}
    rows = db.query(Comment.post_id, func.count(Comment.id))\
             .filter(Comment.post_id.in_(post_ids))\
             .group_by(Comment.post_id)\
             .all()
    return {post_id: count for post_id, count in rows}
