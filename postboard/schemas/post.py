from datetime import datetime
from typing import List, Optional
from pydantic import Field
from postboard.schemas.common import APIModel, UserSummary
from postboard.schemas.comment import CommentOut


class ImageOut(APIModel):
    id: int
    file: str
    url: str
    post_id: int = Field(alias="postId")


class PostCounts(APIModel):
    likes: int = 0
    comments: int = 0


class PostOut(APIModel):
    id: int
    content: str
    user_id: int = Field(alias="userId")
    created_at: datetime = Field(alias="createdAt")
    user: Optional[UserSummary] = None
    images: List[ImageOut] = []
    count: PostCounts = Field(alias="_count")
    liked: bool = False


class PostDetail(PostOut):
    comments: List[CommentOut] = []


class PostCreated(APIModel):
    message: str
    post_id: int = Field(alias="postId")
