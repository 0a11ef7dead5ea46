"""
File storage for waste entry images.

Files live under ``settings.upload_dir`` and are served by the static mount
at ``settings.upload_url_prefix``; the database stores only the relative URL.
"""

import shutil
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO

import structlog

from app.config import settings
from app.core.exceptions import ValidationError

logger = structlog.get_logger(__name__)


class StorageBackend(ABC):
    """Abstract storage backend interface."""

    @abstractmethod
    async def save(self, file: BinaryIO, path: str) -> str:
        """Persist ``file`` under ``path`` and return the stored path."""

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """Remove ``path``; False when it was already gone."""

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check if file exists."""

    @abstractmethod
    def get_url(self, path: str) -> str:
        """Public URL for a stored path."""

    @abstractmethod
    def path_from_url(self, url: str) -> str | None:
        """Inverse of ``get_url``; None for URLs this backend didn't issue."""


class LocalFileStorage(StorageBackend):
    """
    Local filesystem storage.

    uploads/
      └── {tenant_id}/
          └── {uuid}{ext}
    """

    def __init__(self, base_path: str | None = None):
        self.base_path = Path(base_path or settings.upload_dir)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, path: str) -> Path:
        full_path = (self.base_path / path).resolve()
        if self.base_path.resolve() not in full_path.parents:
            raise ValidationError("Invalid storage path")
        return full_path

    async def save(self, file: BinaryIO, path: str) -> str:
        full_path = self._get_full_path(path)
        full_path.parent.mkdir(parents=True, exist_ok=True)

        with open(full_path, "wb") as f:
            shutil.copyfileobj(file, f)

        logger.info("file_saved", path=path)
        return path

    async def delete(self, path: str) -> bool:
        full_path = self._get_full_path(path)

        if full_path.exists():
            full_path.unlink()
            logger.info("file_deleted", path=path)
            return True

        logger.warning("file_missing_on_delete", path=path)
        return False

    async def exists(self, path: str) -> bool:
        return self._get_full_path(path).exists()

    def get_url(self, path: str) -> str:
        return f"{settings.upload_url_prefix}/{path}"

    def path_from_url(self, url: str) -> str | None:
        prefix = f"{settings.upload_url_prefix}/"
        if not url.startswith(prefix):
            return None
        return url[len(prefix):]


def get_storage() -> StorageBackend:
    """Configured storage backend."""
    return LocalFileStorage()


def validate_image_filename(filename: str | None) -> str:
    """
    Return the lower-cased extension of an allowed image file.

    Raises:
        ValidationError: extension not in ``settings.allowed_image_extensions``
    """
    ext = Path(filename or "").suffix.lower()
    if ext not in settings.allowed_image_extensions:
        allowed = ", ".join(sorted(settings.allowed_image_extensions))
        raise ValidationError(f"Unsupported image type '{ext or filename}'. Allowed: {allowed}")
    return ext


def generate_file_path(tenant_id: str, extension: str) -> str:
    """Format: {tenant_id}/{uuid}{ext}"""
    return f"{tenant_id}/{uuid.uuid4().hex}{extension}"
