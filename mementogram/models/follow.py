# mementogram/models/follow.py

from sqlalchemy import Column, Integer, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.sql import func
from mementogram.db.base_class import Base


class Follow(Base):
    """Directed edge: follower sees following's posts in their feed"""
    __tablename__ = "follows"
    __table_args__ = (
        CheckConstraint("follower_id <> following_id", name="ck_follows_no_self_follow"),
        Index("ix_follows_following_id", "following_id"),
    )

    follower_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    following_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
