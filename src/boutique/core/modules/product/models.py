from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from boutique.core.db import MongoModel
from boutique.core.results import ApiModel
from boutique.utils import now

Size = list[Any] | dict[str, Any]


class Product(MongoModel):
    """Catalog product.

    Indexed on created_at for newest-first listing.
    """

    title: str
    price: float
    description: str = ""
    size: Size = Field(default_factory=list)  # e.g. ["S", "M"] or {"S": 3, "M": 0}
    image1_url: str = ""
    image2_url: str = ""
    created_at: datetime = Field(default_factory=now)


class ProductView(ApiModel):
    """Product (API representation)."""

    id: UUID = Field(..., description="Product ID")
    title: str = Field(..., description="Product title")
    price: float = Field(..., description="Price")
    description: str = Field("", description="Product description")
    size: Size = Field(default_factory=list, description="Available sizes")
    image1_url: str = Field("", description="Absolute URL of the first image, empty if none")
    image2_url: str = Field("", description="Absolute URL of the second image, empty if none")
    created_at: datetime = Field(..., description="Creation time")

    @classmethod
    def from_domain(cls, product: Product) -> "ProductView":
        """Create view model from domain model."""
        return cls.model_validate(product.model_dump())
