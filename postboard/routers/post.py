import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from postboard.core.config import Settings
from postboard.core.exceptions import ConstraintViolation, NotFoundError, ServerError
from postboard.core.security import get_current_user_id, get_settings_from_request
from postboard.core.uploads import ImageStorage, get_image_storage
from postboard.crud import comment as comment_crud
from postboard.crud import post as crud
from postboard.db.session import get_db
from postboard.schemas.common import Message, RecordId
from postboard.schemas.post import PostCreated, PostDetail, PostOut
from postboard.schemas.shaping import to_post_detail, to_post_out

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PostCreated)
async def create_post(
    content: str = Form(...),
    images: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    storage: ImageStorage = Depends(get_image_storage),
):
    # Every file is checked before anything touches disk or the database
    uploads = await storage.read_uploads(images or [])
    filenames = await storage.save(uploads)

    try:
        # the session is synchronous, keep its commit off the event loop
        post = await run_in_threadpool(crud.create_post, db, user_id=user_id, content=content, filenames=filenames)
    except (ConstraintViolation, SQLAlchemyError) as e:
        logger.error(f"Database error: {str(e)}")
        # Cleanup uploaded images if database operation failed
        await run_in_threadpool(storage.delete_many, filenames)
        raise ServerError("Failed to create post")

    logger.info("Post %s created by user %s with %d image(s)", post.id, user_id, len(filenames))
    return PostCreated(message="Post created successfully", post_id=post.id)


@router.get("", response_model=List[PostOut])
def get_posts(
    request: Request,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings_from_request),
):
    base_url = str(request.base_url)
    return [to_post_out(row, base_url, settings.upload_url_prefix) for row in crud.list_posts(db, user_id)]


@router.get("/{post_id}", response_model=PostDetail)
def get_post_by_id(
    post_id: RecordId,
    request: Request,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings_from_request),
):
    row = crud.get_post(db, user_id, post_id)
    if row is None:
        raise NotFoundError("Post not found")

    comments = comment_crud.list_for_post(db, post_id)
    return to_post_detail(row, comments, str(request.base_url), settings.upload_url_prefix)


# Ownership mismatch is reported exactly like a missing post
@router.delete("/{post_id}", response_model=Message)
def delete_post(
    post_id: RecordId,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    storage: ImageStorage = Depends(get_image_storage),
):
    post = crud.get_owned(db, user_id, post_id)
    if not post:
        raise NotFoundError("Post not found")

    # file removal is best effort, each failure is logged by the storage
    storage.delete_many([image.file for image in post.images])
    crud.delete_post(db, post.id)

    logger.info("Post %s deleted by user %s", post_id, user_id)
    return {"message": "Post deleted successfully"}
