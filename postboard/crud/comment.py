from typing import Optional

from sqlalchemy.orm import Session, joinedload

from postboard.crud.utils import commit
from postboard.db.models.comment import Comment


def create_comment(db: Session, user_id: int, post_id: int, content: str) -> Comment:
    comment = Comment(content=content, user_id=user_id, post_id=post_id)
    db.add(comment)
    commit(db)
    db.refresh(comment)
    return comment


def list_for_post(db: Session, post_id: int) -> list:
    return (
        db.query(Comment)
        .options(joinedload(Comment.user))
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )


def get_owned(db: Session, user_id: int, comment_id: int) -> Optional[Comment]:
    return db.query(Comment).filter(Comment.id == comment_id, Comment.user_id == user_id).first()


def update_comment(db: Session, comment: Comment, content: str) -> Comment:
    comment.content = content
    commit(db)
    db.refresh(comment)
    return comment


def delete_comment(db: Session, comment: Comment) -> None:
    db.delete(comment)
    commit(db)
