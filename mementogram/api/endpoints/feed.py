# mementogram/api/endpoints/feed.py

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mementogram import crud, schemas
from mementogram.api import deps

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[schemas.PostWithStats])
def read_feed(
    pagination: schemas.Pagination = Depends(deps.get_pagination),
    current_user: schemas.TokenPayload = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db)
):
    """Posts by the current user and everyone they follow, newest first"""
    return crud.get_feed_for_user(
        db,
        current_user.user_id,
        skip=pagination.offset,
        limit=pagination.limit,
    )
