from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from boutique.core.core import Service
from boutique.core.modules.product.models import Product, Size
from boutique.core.modules.upload.models import ProductImages
from boutique.core.results import DeleteResult, InsertResult, UpdateResult
from boutique.errors import NotFoundError

logger = structlog.get_logger(__name__)


class ProductService(Service):
    """Manages catalog products."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("products")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("created_at", -1)])

    async def create_product(
        self, title: str, price: float, description: str, size: Size, images: ProductImages
    ) -> InsertResult:
        product = Product(
            title=title,
            price=price,
            description=description,
            size=size,
            image1_url=images.image1_url,
            image2_url=images.image2_url,
        )
        result = await self._collection.insert_one(product.to_mongo())
        logger.info("product_created", product_id=product.id, title=title)
        return InsertResult.from_pymongo(result)

    async def get_all_products(self) -> list[Product]:
        """Get all products, newest first."""
        return await Product.list_cursor(self._collection.find().sort("created_at", -1))

    async def get_product(self, product_id: UUID) -> Product:
        product = Product.from_mongo(await self._collection.find_one({"_id": product_id}))
        if product is None:
            raise NotFoundError(f"Product '{product_id}' not found")
        return product

    async def update_product(
        self, product_id: UUID, title: str, price: float, description: str, size: Size
    ) -> UpdateResult:
        """Replace the editable fields of a product. Images are kept."""
        result = await self._collection.update_one(
            {"_id": product_id},
            {"$set": {"title": title, "price": price, "description": description, "size": size}},
        )
        logger.info("product_updated", product_id=product_id, matched=result.matched_count)
        return UpdateResult.from_pymongo(result)

    async def delete_product(self, product_id: UUID) -> DeleteResult:
        result = await self._collection.delete_one({"_id": product_id})
        logger.info("product_deleted", product_id=product_id, deleted=result.deleted_count)
        return DeleteResult.from_pymongo(result)
