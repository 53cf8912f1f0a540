from typing import Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from postboard.crud.utils import commit
from postboard.db.models.comment import Comment
from postboard.db.models.like import Like
from postboard.db.models.post import Post
from postboard.db.models.user import User


def create_user(db: Session, username: str, password_hash: str, fullname: Optional[str] = None) -> User:
    user = User(username=username, password=password_hash, fullname=fullname)
    db.add(user)
    commit(db)
    db.refresh(user)
    return user


def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_profile(db: Session, user_id: int) -> Optional[Tuple[User, int, int, int]]:
    """Return ``(user, posts, likes, comments)`` or None when the user is gone."""
    posts = select(func.count(Post.id)).where(Post.user_id == User.id).correlate(User).scalar_subquery()
    likes = select(func.count(Like.id)).where(Like.user_id == User.id).correlate(User).scalar_subquery()
    comments = select(func.count(Comment.id)).where(Comment.user_id == User.id).correlate(User).scalar_subquery()

    row = (
        db.query(User, posts.label("posts"), likes.label("likes"), comments.label("comments"))
        .filter(User.id == user_id)
        .first()
    )
    if row is None:
        return None
    user, post_count, like_count, comment_count = row
    return user, post_count, like_count, comment_count
