# mementogram/models/like.py

from sqlalchemy import Column, Integer, SmallInteger, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from mementogram.db.base_class import Base

LIKE = 1
DISLIKE = -1
NO_VOTE = 0


class Like(Base):
    """A user's vote on a post: +1 like, -1 dislike. No row means no vote."""
    __tablename__ = "likes"
    __table_args__ = (
        CheckConstraint("vote_type IN (1, -1)", name="ck_likes_vote_type"),
        Index("ix_likes_post_id", "post_id"),
    )

    # Composite primary key keeps one vote per (user, post)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    vote_type = Column(SmallInteger, nullable=False, default=LIKE)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    post = relationship("Post", back_populates="likes")
