"""
Application exception hierarchy.

Every error carries the HTTP status it maps to; the handlers registered in
main.py turn them into ``{"message": ...}`` JSON responses.

    PostboardError
    ├── ValidationError        400
    │   ├── InvalidFileTypeError
    │   ├── FileTooLargeError
    │   └── TooManyFilesError
    ├── ConflictError          400
    ├── UnauthorizedError      401
    ├── NotFoundError          404
    └── ServerError            500
"""

from typing import Any, Dict, Optional


class PostboardError(Exception):
    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        # logged server-side, never returned to the client
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PostboardError):
    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidFileTypeError(ValidationError):
    def __init__(self, content_type: Optional[str] = None):
        super().__init__(
            message="Invalid file type. Only JPEG, PNG, GIF and WebP images are allowed.",
            field="images",
            context={"content_type": content_type},
        )


class FileTooLargeError(ValidationError):
    def __init__(self, max_size: int, actual_size: Optional[int] = None):
        super().__init__(
            message=f"File too large. Max size is {max_size // (1024 * 1024)}MB.",
            field="images",
            context={"max_size": max_size, "actual_size": actual_size},
        )


class TooManyFilesError(ValidationError):
    def __init__(self, max_files: int, received: int):
        super().__init__(
            message=f"Too many files. At most {max_files} images are allowed per post.",
            field="images",
            context={"max_files": max_files, "received": received},
        )


class ConflictError(PostboardError):
    status_code = 400


class UnauthorizedError(PostboardError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class NotFoundError(PostboardError):
    status_code = 404

    def __init__(self, message: str = "Not found", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class ServerError(PostboardError):
    status_code = 500


class ConstraintViolation(Exception):
    """Raised by the persistence layer when the store rejects a write.

    ``kind`` is one of ``"unique"``, ``"foreign_key"``, ``"not_null"`` or
    ``"other"`` so handlers can branch on it without looking at driver codes.
    """

    def __init__(self, kind: str, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind} constraint violated: {detail}")


class RecordNotFound(Exception):
    """Raised by the persistence layer when a keyed delete matched no row."""
