from sqlalchemy.orm import Session, joinedload

from postboard.core.exceptions import RecordNotFound
from postboard.crud.utils import commit
from postboard.db.models.like import Like


def create_like(db: Session, user_id: int, post_id: int) -> Like:
    # uniqueness of (user_id, post_id) is left to the store, no pre-check
    like = Like(user_id=user_id, post_id=post_id)
    db.add(like)
    commit(db)
    db.refresh(like)
    return like


def list_for_post(db: Session, post_id: int) -> list:
    return (
        db.query(Like)
        .options(joinedload(Like.user))
        .filter(Like.post_id == post_id)
        .order_by(Like.id.asc())
        .all()
    )


def delete_like(db: Session, user_id: int, post_id: int) -> None:
    deleted = db.query(Like).filter(Like.user_id == user_id, Like.post_id == post_id).delete()
    if not deleted:
        db.rollback()
        raise RecordNotFound(f"No like by user {user_id} on post {post_id}")
    commit(db)
