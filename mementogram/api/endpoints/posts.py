# mementogram/api/endpoints/posts.py

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from mementogram import crud, schemas
from mementogram.api import deps
from mementogram.models.like import LIKE, DISLIKE

logger = logging.getLogger(__name__)
router = APIRouter()


def _viewer_id(current_user: Optional[schemas.TokenPayload]) -> Optional[int]:
    return current_user.user_id if current_user else None


@router.get("", response_model=List[schemas.PostWithStats])
def read_posts(
    pagination: schemas.Pagination = Depends(deps.get_pagination),
    current_user: Optional[schemas.TokenPayload] = Depends(deps.get_current_user_optional),
    db: Session = Depends(deps.get_db)
):
    return crud.get_posts(
        db,
        skip=pagination.offset,
        limit=pagination.limit,
        current_user_id=_viewer_id(current_user),
    )


@router.post("", response_model=schemas.Post, status_code=status.HTTP_201_CREATED)
def create_post(
    post: schemas.PostCreate,
    current_user: schemas.TokenPayload = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db)
):
    return crud.create_post(db, post=post, user_id=current_user.user_id)


@router.get("/{post_id}", response_model=schemas.PostWithStats)
def read_post(
    post_id: int = Path(..., title="The ID of the post"),
    current_user: Optional[schemas.TokenPayload] = Depends(deps.get_current_user_optional),
    db: Session = Depends(deps.get_db)
):
    return crud.get_post(db, post_id, current_user_id=_viewer_id(current_user))


@router.put("/{post_id}", response_model=schemas.Post)
def update_post(
    post_update: schemas.PostUpdate,
    post_id: int = Path(..., title="The ID of the post to update"),
    current_user: schemas.TokenPayload = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db)
):
    return crud.update_post(db, post_id, current_user.user_id, post_update)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int = Path(..., title="The ID of the post to delete"),
    current_user: schemas.TokenPayload = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db)
):
    crud.delete_post(db, post_id, current_user.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/like", response_model=schemas.VoteResult)
def like_post(
    post_id: int = Path(..., title="The ID of the post to like"),
    current_user: schemas.TokenPayload = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db)
):
    """Like a post, or remove the like if the user already liked it"""
    vote_status = crud.like_post(db, current_user.user_id, post_id)
    message = "Post liked successfully." if vote_status == LIKE else "Post like removed."
    return {"status": "success", "message": message, "vote_status": vote_status}


@router.post("/{post_id}/dislike", response_model=schemas.VoteResult)
def dislike_post(
    post_id: int = Path(..., title="The ID of the post to dislike"),
    current_user: schemas.TokenPayload = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db)
):
    """Dislike a post, or remove the dislike if the user already disliked it"""
    vote_status = crud.dislike_post(db, current_user.user_id, post_id)
    message = "Post disliked successfully." if vote_status == DISLIKE else "Post dislike removed."
    return {"status": "success", "message": message, "vote_status": vote_status}


@router.get("/{post_id}/votes", response_model=schemas.VoteCounts)
def read_post_votes(
    post_id: int = Path(..., title="The ID of the post to get vote counts"),
    current_user: Optional[schemas.TokenPayload] = Depends(deps.get_current_user_optional),
    db: Session = Depends(deps.get_db)
):
    counts = crud.get_vote_counts(db, post_id)
    return {
        "post_id": post_id,
        **counts,
        "current_user_vote": crud.get_user_vote_on_post(db, _viewer_id(current_user), post_id),
    }


@router.get("/{post_id}/comments", response_model=List[schemas.Comment])
def read_comments(
    post_id: int = Path(..., title="The ID of the post"),
    pagination: schemas.Pagination = Depends(deps.get_pagination),
    db: Session = Depends(deps.get_db)
):
    return crud.get_comments_for_post(db, post_id, skip=pagination.offset, limit=pagination.limit)


@router.post("/{post_id}/comments", response_model=schemas.Comment, status_code=status.HTTP_201_CREATED)
def create_comment(
    comment: schemas.CommentCreate,
    post_id: int = Path(..., title="The ID of the post to comment on"),
    current_user: schemas.TokenPayload = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db)
):
    return crud.create_comment(db, post_id=post_id, user_id=current_user.user_id, content=comment.content)


@router.get("/{post_id}/comments/count", response_model=schemas.CommentCount)
def read_comment_count(
    post_id: int = Path(..., title="The ID of the post"),
    db: Session = Depends(deps.get_db)
):
    return {"post_id": post_id, "comment_count": crud.get_comment_count(db, post_id)}
