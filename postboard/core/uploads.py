"""
Local image storage for post uploads.

Files are validated as a batch (count, MIME type, size) before anything is
written, so a rejected request never leaves a partial post or stray files.
Stored names are ``<epoch millis>-<random hex><ext>``; the bare name is what
goes into ``images.file``.
"""

import logging
import os
import time
import uuid
from pathlib import Path
from typing import List, Optional, Tuple

import aiofiles
from fastapi import Request, UploadFile

from postboard.core.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    ServerError,
    TooManyFilesError,
)

logger = logging.getLogger(__name__)

# MIME type -> stored extension
ALLOWED_MIME_TYPES = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class ImageStorage:
    def __init__(self, upload_dir: str, max_file_size: int = 5 * 1024 * 1024, max_files: int = 5):
        self.root = Path(upload_dir).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self.max_file_size = max_file_size
        self.max_files = max_files

    def validate_content_type(self, content_type: Optional[str]) -> str:
        extension = ALLOWED_MIME_TYPES.get((content_type or "").lower())
        if extension is None:
            raise InvalidFileTypeError(content_type)
        return extension

    def validate_size(self, size: int) -> None:
        if size > self.max_file_size:
            raise FileTooLargeError(self.max_file_size, size)

    def generate_filename(self, extension: str) -> str:
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{extension}"

    def path_for(self, filename: str) -> Path:
        return self.root / filename

    async def read_uploads(self, files: List[UploadFile]) -> List[Tuple[bytes, str]]:
        """Validate every part and return ``(content, extension)`` in submission order."""
        # browsers send one empty part when no file was picked
        files = [f for f in files if f.filename]
        if len(files) > self.max_files:
            raise TooManyFilesError(self.max_files, len(files))

        validated = []
        for upload in files:
            extension = self.validate_content_type(upload.content_type)
            # read one byte past the limit so oversized files are caught without buffering them whole
            content = await upload.read(self.max_file_size + 1)
            self.validate_size(len(content))
            validated.append((content, extension))
        return validated

    async def save(self, uploads: List[Tuple[bytes, str]]) -> List[str]:
        stored: List[str] = []
        try:
            for content, extension in uploads:
                filename = self.generate_filename(extension)
                async with aiofiles.open(self.path_for(filename), "wb") as f:
                    await f.write(content)
                stored.append(filename)
                logger.info("Stored upload %s (%d bytes)", filename, len(content))
        except OSError as e:
            logger.error(f"Failed to store upload: {str(e)}")
            self.delete_many(stored)
            raise ServerError("Failed to save uploaded image", context={"os_error": str(e)})
        return stored

    def delete(self, filename: str) -> bool:
        """Best-effort removal; failures are logged, never raised."""
        path = self.path_for(filename).resolve()
        if self.root not in path.parents:
            logger.warning("Refusing to delete file outside upload dir: %s", filename)
            return False
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.warning("Image file already gone: %s", filename)
            return False
        except OSError as e:
            logger.error(f"Error deleting file {filename}: {str(e)}")
            return False
        logger.info("Deleted image file %s", filename)
        return True

    def delete_many(self, filenames: List[str]) -> None:
        for filename in filenames:
            self.delete(filename)


def get_image_storage(request: Request) -> ImageStorage:
    return request.app.state.image_storage
