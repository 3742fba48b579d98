# mementogram/crud/crud_post.py

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import desc
from sqlalchemy.orm import Query, Session

from mementogram.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from mementogram.crud import crud_comment, crud_like
from mementogram.models.like import NO_VOTE
from mementogram.models.post import Post
from mementogram.models.user import User
from mementogram.schemas.post import PostCreate, PostUpdate

logger = logging.getLogger(__name__)


def post_with_author_query(db: Session) -> Query:
    """Posts joined with their author, newest first"""
    return db.query(Post, User)\
             .join(User, Post.user_id == User.id)\
             .order_by(desc(Post.created_at), desc(Post.id))


def attach_post_stats(
    db: Session,
    rows: Sequence[Tuple[Post, User]],
    current_user_id: Optional[int] = None
) -> List[dict]:
    """
    Merge engagement stats onto a page of (post, author) rows.

    Vote counts, comment counts and the requester's votes are each fetched
    with a single grouped query keyed by the page's post ids.
    """
    if not rows:
        return []

    post_ids = [post.id for post, _ in rows]
    vote_counts = crud_like.get_vote_counts_for_posts(db, post_ids)
    comment_counts = crud_comment.get_comment_counts_for_posts(db, post_ids)
    user_votes = crud_like.get_user_votes_for_posts(db, current_user_id, post_ids)

    results = []
    for post, author in rows:
        like_count, dislike_count = vote_counts.get(post.id, (0, 0))
        results.append({
            "id": post.id,
            "content": post.content,
            "image_url": post.image_url,
            "created_at": post.created_at,
            "updated_at": post.updated_at,
            "author": {
                "id": author.id,
                "username": author.username,
                "full_name": author.full_name,
                "profile_pic_url": author.profile_pic_url,
            },
            "like_count": like_count,
            "dislike_count": dislike_count,
            "comment_count": comment_counts.get(post.id, 0),
            "current_user_vote": user_votes.get(post.id, NO_VOTE),
        })
    return results


def create_post(db: Session, post: PostCreate, user_id: int) -> Post:
    """Create a new post owned by user_id"""
    if not post.content.strip():
        raise BadRequestError("Post content is required.")
    try:
        db_post = Post(user_id=user_id, content=post.content, image_url=post.image_url)
        db.add(db_post)
        db.commit()
        db.refresh(db_post)
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating post for user {user_id}: {str(e)}", exc_info=True)
        raise
    logger.info(f"Post {db_post.id} created by user {user_id}")
    return db_post


def get_post(db: Session, post_id: int, current_user_id: Optional[int] = None) -> dict:
    """Get a single post with author and engagement stats"""
    row = post_with_author_query(db).filter(Post.id == post_id).first()
    if row is None:
        logger.warning(f"Post with ID {post_id} not found")
        raise NotFoundError(f"Post with ID {post_id} not found.")
    return attach_post_stats(db, [row], current_user_id)[0]


def get_posts(
    db: Session,
    skip: int = 0,
    limit: int = 20,
    current_user_id: Optional[int] = None
) -> List[dict]:
    """Get all posts, newest first, with author and engagement stats"""
    rows = post_with_author_query(db).offset(skip).limit(limit).all()
    logger.info(f"Retrieved {len(rows)} posts with skip={skip} and limit={limit}")
    return attach_post_stats(db, rows, current_user_id)


def _raise_missing_or_forbidden(db: Session, post_id: int, action: str) -> None:
    # Zero rows matched (id, user_id): tell a missing post apart from someone else's
    if db.query(Post.id).filter(Post.id == post_id).first() is None:
        logger.warning(f"Post with ID {post_id} not found")
        raise NotFoundError(f"Post with ID {post_id} not found.")
    logger.warning(f"Refused to {action} post {post_id}: not the owner")
    raise ForbiddenError(f"You do not have permission to {action} post ID {post_id}.")


def update_post(db: Session, post_id: int, user_id: int, post_update: PostUpdate) -> Post:
    """
    Update a post owned by user_id with the fields present in post_update

    Raises:
        BadRequestError: if no fields were provided
        NotFoundError: if the post does not exist
        ForbiddenError: if the post belongs to another user
    """
    patch = post_update.model_dump(exclude_unset=True)
    if patch.get("content") is None:
        patch.pop("content", None)
    if not patch:
        raise BadRequestError("No update data provided (content or image_url).")
    if "content" in patch and not patch["content"].strip():
        raise BadRequestError("Post content cannot be empty.")

    try:
        updated = db.query(Post)\
                    .filter(Post.id == post_id, Post.user_id == user_id)\
                    .update(patch, synchronize_session=False)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating post {post_id}: {str(e)}", exc_info=True)
        raise

    if updated == 0:
        _raise_missing_or_forbidden(db, post_id, "update")

    logger.info(f"Post {post_id} updated by user {user_id}: {sorted(patch)}")
    return db.query(Post).filter(Post.id == post_id).first()


def delete_post(db: Session, post_id: int, user_id: int) -> None:
    """
    Delete a post owned by user_id

    Raises:
        NotFoundError: if the post does not exist
        ForbiddenError: if the post belongs to another user
    """
    try:
        deleted = db.query(Post)\
                    .filter(Post.id == post_id, Post.user_id == user_id)\
                    .delete(synchronize_session=False)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting post {post_id}: {str(e)}", exc_info=True)
        raise

    if deleted == 0:
        _raise_missing_or_forbidden(db, post_id, "delete")
    logger.info(f"Post {post_id} deleted by user {user_id}")
