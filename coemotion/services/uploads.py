"""Local storage for uploaded profile images."""

import logging
import os
import shutil
import time
from pathlib import Path

from fastapi import UploadFile

from coemotion.errors import BadRequestError, InternalError
from coemotion.services.response_assembler import UPLOADS_PREFIX

logger = logging.getLogger(__name__)


class UploadStorage:
    """Writes uploads into a single directory served at ``/uploads``."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    @staticmethod
    def generate_name(filename: str) -> str:
        """``<nanosecond timestamp>_<original name>``, without any directories."""
        base = os.path.basename(filename.replace("\\", "/"))
        if not base or base in (".", ".."):
            raise BadRequestError("No file provided or invalid file")
        return f"{time.time_ns()}_{base}"

    def save(self, upload: UploadFile) -> tuple[Path, str]:
        """Write the upload to disk and return its path and public URL."""
        name = self.generate_name(upload.filename or "")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path = self.directory / name
            with path.open("wb") as out:
                shutil.copyfileobj(upload.file, out)
        except OSError as e:
            logger.error(f"Error saving upload {name}: {e}")
            raise InternalError("Failed to save the file") from e

        logger.info(f"Image saved at: {path}")
        return path, UPLOADS_PREFIX + name

    def discard(self, path: Path) -> None:
        """Remove a stored upload whose database update did not go through."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove orphaned upload {path}: {e}")
