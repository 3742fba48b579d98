# mementogram/schemas/common.py

from pydantic import BaseModel


class Pagination(BaseModel):
    limit: int = 20
    offset: int = 0


class Message(BaseModel):
    status: str = "success"
    message: str
