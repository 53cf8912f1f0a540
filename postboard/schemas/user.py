from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from postboard.schemas.common import APIModel


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    fullname: Optional[str] = None


class UserLogin(BaseModel):
    username: str
    password: str


class ProfileCounts(APIModel):
    posts: int = 0
    likes: int = 0
    comments: int = 0


# password is never part of any user response
class UserProfile(APIModel):
    id: int
    username: str
    fullname: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")
    count: ProfileCounts = Field(alias="_count")
