"""Blob stores holding uploaded product photos."""

import asyncio
from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path
from typing import Any

import cloudinary.exceptions
import cloudinary.uploader
import structlog

from boutique.config import Config
from boutique.core.modules.upload.utils import build_stored_name
from boutique.errors import StorageError

logger = structlog.get_logger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


class BlobStore(ABC):
    """Capability to persist file bytes and return a retrieval URL."""

    @abstractmethod
    async def store(self, content: bytes, filename: str, content_type: str) -> str:
        """Store content and return its URL.

        The URL is either absolute or relative to the serving host.

        Raises:
            StorageError: If the file could not be stored
        """


class LocalBlobStore(BlobStore):
    """Writes files under a local directory served by this process."""

    def __init__(self, uploads_path: str | Path, url_prefix: str = UPLOADS_URL_PREFIX) -> None:
        self.uploads_path = Path(uploads_path)
        self.url_prefix = url_prefix.rstrip("/")

    async def store(self, content: bytes, filename: str, content_type: str) -> str:
        name = build_stored_name(filename)
        file_path = self.uploads_path / name
        try:
            await asyncio.to_thread(_write_file, file_path, content)
        except OSError as e:
            raise StorageError(f"Could not write {name}: {e}") from e
        logger.debug("file_stored", backend="local", path=str(file_path), size=len(content))
        return f"{self.url_prefix}/{name}"


class CloudinaryBlobStore(BlobStore):
    """Delegates storage and URL construction to Cloudinary."""

    def __init__(self, cloud_name: str, api_key: str, api_secret: str, folder: str) -> None:
        self._credentials = {"cloud_name": cloud_name, "api_key": api_key, "api_secret": api_secret}
        self.folder = folder

    async def store(self, content: bytes, filename: str, content_type: str) -> str:
        public_id = build_stored_name(filename)
        try:
            result = await asyncio.to_thread(self._upload, content, public_id)
        except (cloudinary.exceptions.Error, OSError) as e:
            raise StorageError(f"Cloudinary upload failed: {e}") from e
        url = result.get("secure_url") or result.get("url")
        if not url:
            raise StorageError("Cloudinary upload returned no URL")
        logger.debug("file_stored", backend="cloudinary", public_id=public_id, size=len(content))
        return str(url)

    def _upload(self, content: bytes, public_id: str) -> dict[str, Any]:
        return cloudinary.uploader.upload(
            BytesIO(content),
            folder=self.folder,
            public_id=public_id,
            resource_type="image",
            **self._credentials,
        )


def create_blob_store(config: Config) -> BlobStore:
    """Select the blob store backend configured for this process."""
    if config.storage_backend == "cloudinary":
        if not (config.cloudinary_cloud_name and config.cloudinary_api_key and config.cloudinary_api_secret):
            raise ValueError("Cloudinary storage requires cloud name, API key and API secret")
        return CloudinaryBlobStore(
            cloud_name=config.cloudinary_cloud_name,
            api_key=config.cloudinary_api_key,
            api_secret=config.cloudinary_api_secret,
            folder=config.cloudinary_folder,
        )
    return LocalBlobStore(config.uploads_path)


def _write_file(file_path: Path, content: bytes) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_bytes(content)
