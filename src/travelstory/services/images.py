"""Image storage on the local upload directory.

Uploaded files are served back by ``StaticFiles`` under ``/uploads``; the
public URL is built from configuration, never from the incoming request.
"""

import logging
import os
import shutil
import time
import uuid
from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from travelstory.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class ImageStore:
    """Saves, locates and removes uploaded image files."""

    def __init__(self, upload_dir: Path, public_base_url: str):
        self.upload_dir = upload_dir
        self.public_base_url = public_base_url.rstrip("/")

    def ensure_directory(self) -> None:
        os.makedirs(self.upload_dir, exist_ok=True)

    def url_for(self, filename: str) -> str:
        return f"{self.public_base_url}/uploads/{filename}"

    def path_for_url(self, image_url: str) -> Path:
        """Map an image URL onto the upload directory by its trailing filename."""
        filename = PurePosixPath(urlsplit(image_url).path).name or os.path.basename(image_url)
        return self.upload_dir / filename

    @staticmethod
    def _new_filename(original: str | None) -> str:
        suffix = Path(original or "").suffix
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{suffix}"

    async def save(self, upload: UploadFile) -> str:
        """Write an uploaded file under a server-managed name.

        Returns:
            The public URL of the stored file
        """
        filename = self._new_filename(upload.filename)
        path = self.upload_dir / filename

        def _write() -> None:
            self.ensure_directory()
            with path.open("wb") as buffer:
                shutil.copyfileobj(upload.file, buffer)

        await run_in_threadpool(_write)
        logger.info(f"Image stored: {filename}")
        return self.url_for(filename)

    async def delete_by_url(self, image_url: str) -> None:
        """Remove the file behind ``image_url``.

        Raises:
            NotFoundError: If no such file exists
        """
        path = self.path_for_url(image_url)
        if not path.is_file():
            raise NotFoundError("Image not found")
        await run_in_threadpool(path.unlink)

    async def discard_by_url(self, image_url: str) -> bool:
        """Best-effort removal used after a story is deleted.

        Failures are logged, never raised.

        Returns:
            True if a file was removed
        """
        path = self.path_for_url(image_url)
        if not path.is_file():
            logger.info(f"Image file not found: {path}")
            return False
        try:
            await run_in_threadpool(path.unlink)
        except OSError as e:
            logger.warning(f"Failed to delete image file {path}: {e}")
            return False
        logger.info(f"Image file deleted: {path}")
        return True
