from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from postboard.schemas.common import APIModel, UserSummary


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)


class CommentUpdate(CommentCreate):
    pass


class CommentOut(APIModel):
    id: int
    content: str
    user_id: int = Field(alias="userId")
    post_id: int = Field(alias="postId")
    created_at: datetime = Field(alias="createdAt")
    user: Optional[UserSummary] = None
