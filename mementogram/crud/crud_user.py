# mementogram/crud/crud_user.py

import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mementogram.core.exceptions import BadRequestError, ConflictError, NotFoundError
from mementogram.core.security import get_password_hash, verify_password
from mementogram.crud import crud_follow
from mementogram.models.user import ADMIN_ROLE_ID, USER_ROLE_ID, Role, User
from mementogram.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def seed_initial_roles(db: Session):
    logger.info("Checking if initial roles need to be seeded")
    if db.query(Role).count() == 0:
        logger.info("No roles found. Seeding initial roles.")
        db.add(Role(id=USER_ROLE_ID, name="USER"))
        db.add(Role(id=ADMIN_ROLE_ID, name="ADMIN"))
        db.commit()
        logger.info("Seeded USER and ADMIN roles")
    else:
        logger.info("Roles already exist. No need to seed.")


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_user_by_email_or_username(db: Session, email_or_username: str) -> Optional[User]:
    """Look up a user for login by either identifier"""
    return db.query(User).filter(
        or_(User.email == email_or_username, User.username == email_or_username)
    ).first()


def create_user(db: Session, user: UserCreate) -> User:
    """
    Register a new user with a hashed password and the default role

    Raises:
        ConflictError: if the email or username is already taken
    """
    if get_user_by_email(db, user.email) or get_user_by_username(db, user.username):
        raise ConflictError("Email or username already exists.")

    try:
        db_user = User(
            email=user.email,
            username=user.username,
            password_hash=get_password_hash(user.password),
            full_name=user.full_name,
            role_id=USER_ROLE_ID,
        )
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"IntegrityError registering {user.username}: {str(e)}")
        raise ConflictError("Email or username already exists.")
    logger.info(f"User registered. ID: {db_user.id}")
    return db_user


def authenticate(db: Session, email_or_username: str, password: str) -> Optional[User]:
    """Return the user if the credentials match, otherwise None"""
    user = get_user_by_email_or_username(db, email_or_username)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login failed: invalid credentials")
        return None
    return user


def update_user(db: Session, user_id: int, user_update: UserUpdate) -> User:
    """
    Apply a sparse profile patch for user_id

    Raises:
        BadRequestError: if the patch is empty
        NotFoundError: if the user does not exist
        ConflictError: if the new username belongs to someone else
    """
    patch = user_update.model_dump(exclude_unset=True)
    if patch.get("username") is None:
        patch.pop("username", None)
    if not patch:
        raise BadRequestError(
            "No update data provided (e.g., full_name, bio, username, profile_pic_url)."
        )

    db_user = get_user(db, user_id)
    if db_user is None:
        raise NotFoundError("User profile not found.")

    if "username" in patch and patch["username"] != db_user.username:
        if get_user_by_username(db, patch["username"]):
            raise ConflictError("Username already taken.")

    for field, value in patch.items():
        setattr(db_user, field, value)
    try:
        db.commit()
        db.refresh(db_user)
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"IntegrityError updating user {user_id}: {str(e)}")
        raise ConflictError("Username already taken.")
    logger.info(f"User {user_id} updated: {sorted(patch)}")
    return db_user


def get_public_profile(db: Session, username: str) -> dict:
    """Public profile by username, with follower and following counts"""
    user = get_user_by_username(db, username)
    if user is None:
        logger.warning(f"User {username} not found")
        raise NotFoundError(f"User '{username}' not found.")
    return {
        "id": user.id,
        "username": user.username,
        "full_name": user.full_name,
        "bio": user.bio,
        "profile_pic_url": user.profile_pic_url,
        "created_at": user.created_at,
        **crud_follow.get_follow_counts(db, user.id),
    }
