import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from postboard.core.exceptions import ConstraintViolation, NotFoundError, ServerError
from postboard.core.security import get_current_user_id
from postboard.crud import comment as crud
from postboard.db.session import get_db
from postboard.schemas.comment import CommentCreate, CommentOut, CommentUpdate
from postboard.schemas.common import Message, RecordId
from postboard.schemas.shaping import to_comment_out

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{post_id}", status_code=status.HTTP_201_CREATED, response_model=CommentOut)
def create_comment(
    post_id: RecordId,
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        comment = crud.create_comment(db, user_id=user_id, post_id=post_id, content=comment_in.content)
    except ConstraintViolation as e:
        logger.error(f"Database error on comment: {e.detail}")
        raise ServerError("Failed to create comment")
    return to_comment_out(comment)


@router.get("/post/{post_id}", response_model=List[CommentOut])
def get_comments(post_id: RecordId, db: Session = Depends(get_db)):
    return [to_comment_out(comment) for comment in crud.list_for_post(db, post_id)]


@router.put("/{comment_id}", response_model=CommentOut)
def update_comment(
    comment_id: RecordId,
    comment_in: CommentUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    comment = crud.get_owned(db, user_id, comment_id)
    if not comment:
        raise NotFoundError("Comment not found or unauthorized")

    return to_comment_out(crud.update_comment(db, comment, comment_in.content))


@router.delete("/{comment_id}", response_model=Message)
def delete_comment(
    comment_id: RecordId,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    comment = crud.get_owned(db, user_id, comment_id)
    if not comment:
        raise NotFoundError("Comment not found or unauthorized")

    crud.delete_comment(db, comment)
    return {"message": "Comment deleted successfully"}
