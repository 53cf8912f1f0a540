import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from postboard.core.config import Settings
from postboard.core.exceptions import (
    ConflictError,
    ConstraintViolation,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)
from postboard.core.security import (
    create_access_token,
    get_current_user_id,
    get_settings_from_request,
    hash_password,
    verify_password,
)
from postboard.crud import user as crud
from postboard.db.session import get_db
from postboard.schemas.common import Message
from postboard.schemas.token import Token
from postboard.schemas.user import ProfileCounts, UserCreate, UserLogin, UserProfile

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=Message)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    try:
        crud.create_user(
            db,
            username=user_in.username,
            password_hash=hash_password(user_in.password),
            fullname=user_in.fullname,
        )
    except ConstraintViolation as e:
        if e.kind == "unique":
            raise ConflictError("Username already exists")
        logger.error(f"Database error on register: {e.detail}")
        raise ServerError("Failed to create user")

    return {"message": "User created successfully"}


@router.post("/login", response_model=Token)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_from_request),
):
    user = crud.get_by_username(db, credentials.username)
    if not user:
        raise NotFoundError("User not found")
    if not verify_password(credentials.password, user.password):
        raise UnauthorizedError("Invalid password")

    return Token(token=create_access_token(user.id, settings))


@router.get("/profile", response_model=UserProfile)
def get_profile(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    result = crud.get_profile(db, user_id)
    if result is None:
        raise NotFoundError("User not found")

    user, posts, likes, comments = result
    return UserProfile(
        id=user.id,
        username=user.username,
        fullname=user.fullname,
        created_at=user.created_at,
        count=ProfileCounts(posts=posts, likes=likes, comments=comments),
    )
