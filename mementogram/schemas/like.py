# mementogram/schemas/like.py

from pydantic import BaseModel


class VoteResult(BaseModel):
    status: str = "success"
    message: str
    vote_status: int


class VoteCounts(BaseModel):
    post_id: int
    like_count: int = 0
    dislike_count: int = 0
    current_user_vote: int = 0
