from dataclasses import dataclass

from pydantic import Field

from boutique.core.results import ApiModel


@dataclass
class IncomingFile:
    """One file part received in a multipart request."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def is_empty(self) -> bool:
        """Browsers send an empty nameless part for an untouched file input."""
        return not self.filename and not self.content


class ProductImages(ApiModel):
    """Fully qualified URLs of stored product photos, empty when not uploaded."""

    image1_url: str = Field("", description="URL of the first product image")
    image2_url: str = Field("", description="URL of the second product image")
