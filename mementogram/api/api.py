# mementogram/api/api.py

import logging
from fastapi import APIRouter
from mementogram.api.endpoints import auth, users, posts, feed

logger = logging.getLogger(__name__)

api_router = APIRouter()

try:
    api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
    logger.info("Auth router included successfully")
except Exception as e:
    logger.error(f"Failed to include auth router: {str(e)}", exc_info=True)

try:
    api_router.include_router(users.router, prefix="/users", tags=["users"])
    logger.info("Users router included successfully")
except Exception as e:
    logger.error(f"Failed to include users router: {str(e)}", exc_info=True)

try:
    api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
    logger.info("Posts router included successfully")
except Exception as e:
    logger.error(f"Failed to include posts router: {str(e)}", exc_info=True)

try:
    api_router.include_router(feed.router, prefix="/feed", tags=["feed"])
    logger.info("Feed router included successfully")
except Exception as e:
    logger.error(f"Failed to include feed router: {str(e)}", exc_info=True)

logger.info(f"API routes configured: {[getattr(route, 'path', route) for route in api_router.routes]}")
