import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from postboard.core.exceptions import ConflictError, ConstraintViolation, RecordNotFound, ServerError
from postboard.core.security import get_current_user_id
from postboard.crud import like as crud
from postboard.db.session import get_db
from postboard.schemas.common import Message, RecordId
from postboard.schemas.like import LikeOut, LikeWithUser
from postboard.schemas.shaping import to_like_out, to_like_with_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{post_id}", status_code=status.HTTP_201_CREATED, response_model=LikeOut)
def like_post(
    post_id: RecordId,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        like = crud.create_like(db, user_id=user_id, post_id=post_id)
    except ConstraintViolation as e:
        if e.kind == "unique":
            raise ConflictError("Post already liked")
        logger.error(f"Database error on like: {e.detail}")
        raise ServerError("Failed to like post")
    return to_like_out(like)


@router.get("/post/{post_id}", response_model=List[LikeWithUser])
def get_likes(post_id: RecordId, db: Session = Depends(get_db)):
    return [to_like_with_user(like) for like in crud.list_for_post(db, post_id)]


@router.delete("/{post_id}", response_model=Message)
def unlike_post(
    post_id: RecordId,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        crud.delete_like(db, user_id=user_id, post_id=post_id)
    except RecordNotFound as e:
        # no distinct not-found for a missing like, it is a plain failure
        logger.warning(str(e))
        raise ServerError("Failed to remove like")
    return {"message": "Like removed successfully"}
