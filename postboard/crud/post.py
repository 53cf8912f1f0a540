"""
Post persistence.

List and detail queries return rows of ``(post, likes_count, comments_count,
liked)``; ``liked`` only ever probes the viewer's own like row.
"""

from typing import List, Optional

from sqlalchemy import exists, func, select
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from postboard.crud.utils import commit
from postboard.db.models.comment import Comment
from postboard.db.models.image import Image
from postboard.db.models.like import Like
from postboard.db.models.post import Post


def _post_query(db: Session, viewer_id: int) -> Query:
    likes_count = select(func.count(Like.id)).where(Like.post_id == Post.id).correlate(Post).scalar_subquery()
    comments_count = select(func.count(Comment.id)).where(Comment.post_id == Post.id).correlate(Post).scalar_subquery()
    liked = exists().where(Like.post_id == Post.id, Like.user_id == viewer_id).correlate(Post)

    return (
        db.query(
            Post,
            likes_count.label("likes_count"),
            comments_count.label("comments_count"),
            liked.label("liked"),
        )
        .options(joinedload(Post.user), selectinload(Post.images))
    )


def create_post(db: Session, user_id: int, content: str, filenames: List[str]) -> Post:
    post = Post(
        content=content,
        user_id=user_id,
        images=[Image(file=filename) for filename in filenames],
    )
    db.add(post)
    commit(db)
    db.refresh(post)
    return post


def list_posts(db: Session, viewer_id: int) -> list:
    return _post_query(db, viewer_id).order_by(Post.created_at.desc(), Post.id.desc()).all()


def get_post(db: Session, viewer_id: int, post_id: int):
    return _post_query(db, viewer_id).filter(Post.id == post_id).first()


def get_owned(db: Session, user_id: int, post_id: int) -> Optional[Post]:
    return (
        db.query(Post)
        .options(selectinload(Post.images))
        .filter(Post.id == post_id, Post.user_id == user_id)
        .first()
    )


def delete_post(db: Session, post_id: int) -> None:
    """Delete a post and every row that references it in one transaction."""
    db.query(Image).filter(Image.post_id == post_id).delete()
    db.query(Like).filter(Like.post_id == post_id).delete()
    db.query(Comment).filter(Comment.post_id == post_id).delete()
    db.query(Post).filter(Post.id == post_id).delete()
    commit(db)
