import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from postboard.api.v1 import auth
from postboard.core.config import Settings, get_settings
from postboard.core.exceptions import PostboardError
from postboard.core.logging import setup_logging
from postboard.core.uploads import ImageStorage
from postboard.db.session import Database
from postboard.middleware.logging import RequestLoggingMiddleware
from postboard.routers import comment, health, like, post

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    if settings.jwt_secret == "change-me":
        logger.warning("JWT_SECRET is not set, tokens are signed with the default secret")

    app.state.database.create_all()
    logger.info("Uploads stored in %s", app.state.image_storage.root)
    logger.info("Postboard API started")

    yield

    app.state.database.dispose()
    logger.info("Postboard API stopped")


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path", "form"))
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PostboardError)
    async def handle_app_error(request: Request, exc: PostboardError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s | %s", request.method, request.url.path, exc.message, exc.context)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": _validation_message(exc)})

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error: {str(exc)}")
        return JSONResponse(status_code=500, content={"message": "A database error occurred"})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="Postboard API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database or Database(settings.database_url, echo=settings.log_level == "DEBUG")
    app.state.image_storage = ImageStorage(
        settings.upload_dir,
        max_file_size=settings.max_upload_size,
        max_files=settings.max_upload_files,
    )

    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(post.router, prefix="/api/posts", tags=["Posts"])
    app.include_router(like.router, prefix="/api/likes", tags=["Likes"])
    app.include_router(comment.router, prefix="/api/comments", tags=["Comments"])
    app.include_router(health.router, tags=["Health"])

    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=str(app.state.image_storage.root)),
        name="uploads",
    )
    return app


app = create_app()
