from typing import Annotated, Optional
from fastapi import Path
from pydantic import BaseModel

# ids are 32-bit integer columns; anything outside that range can't name a row
MAX_RECORD_ID = 2_147_483_647

RecordId = Annotated[int, Path(ge=1, le=MAX_RECORD_ID)]


class APIModel(BaseModel):
    class Config:
        from_attributes = True
        populate_by_name = True


class UserSummary(APIModel):
    username: str
    fullname: Optional[str] = None


class Message(BaseModel):
    message: str
