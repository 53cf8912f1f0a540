from typing import Optional
from pydantic import Field
from postboard.schemas.common import APIModel, UserSummary


class LikeOut(APIModel):
    id: int
    user_id: int = Field(alias="userId")
    post_id: int = Field(alias="postId")


class LikeWithUser(LikeOut):
    user: Optional[UserSummary] = None
