# mementogram/api/endpoints/users.py

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from mementogram import crud, schemas
from mementogram.api import deps
from mementogram.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=schemas.User)
def read_me(
    current_user: schemas.TokenPayload = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db)
):
    db_user = crud.get_user(db, current_user.user_id)
    if db_user is None:
        raise NotFoundError("User profile not found.")
    return db_user


@router.put("/me", response_model=schemas.User)
def update_me(
    user_update: schemas.UserUpdate,
    current_user: schemas.TokenPayload = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db)
):
    return crud.update_user(db, current_user.user_id, user_update)


@router.post("/{user_id}/follow", response_model=schemas.Message)
def follow_user(
    user_id: int = Path(..., title="The ID of the user to follow"),
    current_user: schemas.TokenPayload = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db)
):
    crud.follow_user(db, follower_id=current_user.user_id, following_id=user_id)
    return {"status": "success", "message": "User followed successfully."}


@router.delete("/{user_id}/follow", status_code=status.HTTP_204_NO_CONTENT)
def unfollow_user(
    user_id: int = Path(..., title="The ID of the user to unfollow"),
    current_user: schemas.TokenPayload = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db)
):
    crud.unfollow_user(db, follower_id=current_user.user_id, following_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}/follow-status", response_model=schemas.FollowStatus)
def get_follow_status(
    user_id: int = Path(..., title="The ID of the user to check"),
    current_user: schemas.TokenPayload = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db)
):
    """Check if the current user follows user_id"""
    return {
        "user_id": user_id,
        "is_following": crud.is_following(db, current_user.user_id, user_id),
    }


@router.get("/{user_id}/following", response_model=List[schemas.PublicUserProfile])
def read_following(
    user_id: int,
    pagination: schemas.Pagination = Depends(deps.get_pagination),
    db: Session = Depends(deps.get_db)
):
    logger.info(f"Fetching following of user {user_id} with {pagination}")
    return crud.get_following(db, user_id, skip=pagination.offset, limit=pagination.limit)


@router.get("/{user_id}/followers", response_model=List[schemas.PublicUserProfile])
def read_followers(
    user_id: int,
    pagination: schemas.Pagination = Depends(deps.get_pagination),
    db: Session = Depends(deps.get_db)
):
    logger.info(f"Fetching followers of user {user_id} with {pagination}")
    return crud.get_followers(db, user_id, skip=pagination.offset, limit=pagination.limit)


@router.get("/{username}", response_model=schemas.UserProfile)
def read_user_profile(username: str, db: Session = Depends(deps.get_db)):
    return crud.get_public_profile(db, username)
