from collections.abc import Mapping, Sequence
from urllib.parse import urljoin

import structlog

from boutique.core.core import Service
from boutique.core.modules.upload.image import ensure_image
from boutique.core.modules.upload.models import IncomingFile, ProductImages
from boutique.errors import ValidationError

logger = structlog.get_logger(__name__)

IMAGE_FIELDS = ("image1", "image2")


class UploadService(Service):
    """Routes uploaded product photos to the configured blob store."""

    async def ingest(self, files: Mapping[str, Sequence[IncomingFile]], base_url: str) -> ProductImages:
        """Store the image1/image2 files and return their absolute URLs.

        Args:
            files: File parts by form field name
            base_url: Base URL of the current request (ending in /), used for host-relative URLs

        Raises:
            ValidationError: On unknown fields, more than one file per field or non-image files
            StorageError: If the blob store fails
        """
        unknown = set(files) - set(IMAGE_FIELDS)
        if unknown:
            raise ValidationError(f"Unexpected file field: {', '.join(sorted(unknown))}")

        selected: dict[str, IncomingFile] = {}
        max_size = self.core.config.max_upload_size
        for field in IMAGE_FIELDS:
            parts = [part for part in files.get(field, ()) if not part.is_empty]
            if len(parts) > 1:
                raise ValidationError(f"Only one file allowed for '{field}'")
            if parts:
                ensure_image(field, parts[0].content, max_size)
                selected[field] = parts[0]

        # Validate everything before storing anything
        urls = dict.fromkeys(IMAGE_FIELDS, "")
        for field, part in selected.items():
            stored = await self.core.blob_store.store(part.content, part.filename, part.content_type)
            # Host-relative paths resolve under the base URL so a mounted root_path is kept
            urls[field] = urljoin(base_url, stored.lstrip("/"))
            logger.debug("image_ingested", field=field, url=urls[field])

        return ProductImages(image1_url=urls["image1"], image2_url=urls["image2"])
