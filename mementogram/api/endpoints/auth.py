# mementogram/api/endpoints/auth.py

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mementogram import crud, schemas
from mementogram.api import deps
from mementogram.core.exceptions import UnauthorizedError
from mementogram.core.security import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user: schemas.UserCreate, db: Session = Depends(deps.get_db)):
    logger.info(f"Received registration request for username: {user.username}")
    db_user = crud.create_user(db=db, user=user)
    token = create_access_token(db_user.id, db_user.role_name)
    return {
        "message": "User registered successfully!",
        "user": db_user,
        "token": token,
    }


@router.post("/login", response_model=schemas.AuthResponse)
def login(credentials: schemas.LoginRequest, db: Session = Depends(deps.get_db)):
    db_user = crud.authenticate(db, credentials.email_or_username, credentials.password)
    if db_user is None:
        raise UnauthorizedError("Invalid credentials.")
    logger.info(f"User {db_user.id} logged in")
    return {
        "message": "Login successful!",
        "user": db_user,
        "token": create_access_token(db_user.id, db_user.role_name),
    }
