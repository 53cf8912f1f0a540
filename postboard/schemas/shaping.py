"""Builds the response DTOs from ORM rows; raw entities are never serialized."""

from postboard.db.models.comment import Comment
from postboard.db.models.image import Image
from postboard.db.models.like import Like
from postboard.schemas.comment import CommentOut
from postboard.schemas.common import UserSummary
from postboard.schemas.like import LikeOut, LikeWithUser
from postboard.schemas.post import ImageOut, PostCounts, PostDetail, PostOut


def image_url(base_url: str, url_prefix: str, filename: str) -> str:
    return f"{base_url.rstrip('/')}/{url_prefix.strip('/')}/{filename}"


def to_image_out(image: Image, base_url: str, url_prefix: str) -> ImageOut:
    return ImageOut(
        id=image.id,
        file=image.file,
        url=image_url(base_url, url_prefix, image.file),
        post_id=image.post_id,
    )


def to_user_summary(user) -> UserSummary:
    return UserSummary.model_validate(user) if user is not None else None


def to_post_out(row, base_url: str, url_prefix: str, model=PostOut, **extra) -> PostOut:
    post, likes_count, comments_count, liked = row
    return model(
        id=post.id,
        content=post.content,
        user_id=post.user_id,
        created_at=post.created_at,
        user=to_user_summary(post.user),
        images=[to_image_out(image, base_url, url_prefix) for image in post.images],
        count=PostCounts(likes=likes_count or 0, comments=comments_count or 0),
        liked=bool(liked),
        **extra,
    )


def to_post_detail(row, comments, base_url: str, url_prefix: str) -> PostDetail:
    return to_post_out(
        row,
        base_url,
        url_prefix,
        model=PostDetail,
        comments=[to_comment_out(comment) for comment in comments],
    )


def to_comment_out(comment: Comment) -> CommentOut:
    return CommentOut(
        id=comment.id,
        content=comment.content,
        user_id=comment.user_id,
        post_id=comment.post_id,
        created_at=comment.created_at,
        user=to_user_summary(comment.user),
    )


def to_like_out(like: Like) -> LikeOut:
    return LikeOut(id=like.id, user_id=like.user_id, post_id=like.post_id)


def to_like_with_user(like: Like) -> LikeWithUser:
    return LikeWithUser(
        id=like.id,
        user_id=like.user_id,
        post_id=like.post_id,
        user=to_user_summary(like.user),
    )
