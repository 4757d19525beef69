from typing import Annotated, Any

from fastapi import APIRouter, File, Form, Request, UploadFile
from pydantic import Field
from starlette.datastructures import FormData
from starlette.datastructures import UploadFile as StarletteUploadFile

from boutique.core.modules.product.models import ProductView
from boutique.core.modules.upload.image import ensure_size
from boutique.core.modules.upload.models import IncomingFile
from boutique.core.results import ApiModel, DeleteResult, InsertResult, UpdateResult
from boutique.web.deps import AdminDep, AppDep, MutationGuard
from boutique.web.openapi import ErrorResponse

router = APIRouter(tags=["products"])


class CreateProductResponse(ApiModel):
    """Result of product creation."""

    success: bool = Field(True, description="Whether the product was stored")
    result: InsertResult = Field(..., description="Insert result")


class UpdateProductRequest(ApiModel):
    """Request to update a product."""

    title: str = Field(..., description="Product title")
    price: float | str = Field(..., description="Price, numeric strings are coerced")
    description: str = Field("", description="Product description")
    size: Any = Field(..., description="Sizes as a JSON array/object or its string encoding")


async def read_file_parts(form: FormData, max_size: int) -> dict[str, list[IncomingFile]]:
    """Read every file part of a multipart form, grouped by field name.

    Parts that declare a size over the upload limit are rejected before they are read.
    """
    files: dict[str, list[IncomingFile]] = {}
    for field, value in form.multi_items():
        if not isinstance(value, StarletteUploadFile):
            continue
        if value.size is not None:
            ensure_size(field, value.size, max_size)
        files.setdefault(field, []).append(
            IncomingFile(
                filename=value.filename or "",
                content=await value.read(),
                content_type=value.content_type or "application/octet-stream",
            )
        )
    return files


@router.post(
    "/products",
    summary="Create product",
    description=(
        "Create a product from multipart form data. `size` is a JSON string. "
        "`image1` and `image2` take at most one image each. Admin only."
    ),
    operation_id="createProduct",
    responses={
        200: {"description": "Product created"},
        400: {"model": ErrorResponse, "description": "Invalid price, size or image"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Invalid token or admin privileges required"},
        502: {"model": ErrorResponse, "description": "Image storage failed"},
    },
)
async def create_product(
    request: Request,
    app: AppDep,
    _admin: AdminDep,
    title: Annotated[str, Form()],
    price: Annotated[str, Form()],
    size: Annotated[str, Form()],
    description: Annotated[str, Form()] = "",
    # Declared for the schema; files are taken from the whole form so unexpected fields are seen
    image1: Annotated[list[UploadFile] | None, File()] = None,  # noqa: ARG001
    image2: Annotated[list[UploadFile] | None, File()] = None,  # noqa: ARG001
) -> CreateProductResponse:
    files = await read_file_parts(await request.form(), app.config.max_upload_size)
    result = await app.create_product(title, price, size, description, files, str(request.base_url))
    return CreateProductResponse(result=result)


@router.get(
    "/products",
    summary="List products",
    description="Get all products, newest first.",
    operation_id="listProducts",
    responses={200: {"description": "List of products"}},
)
async def list_products(app: AppDep) -> list[ProductView]:
    return await app.get_all_products()


@router.get(
    "/products/{product_id}",
    summary="Get product",
    description="Get a single product by ID.",
    operation_id="getProduct",
    responses={
        200: {"description": "Product"},
        400: {"model": ErrorResponse, "description": "Malformed product ID"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
)
async def get_product(product_id: str, app: AppDep) -> ProductView:
    return await app.get_product(product_id)


@router.put(
    "/products/{product_id}",
    summary="Update product",
    description="Update title, price, description and sizes of a product. Images are kept.",
    operation_id="updateProduct",
    dependencies=[MutationGuard],
    responses={
        200: {"description": "Update result"},
        400: {"model": ErrorResponse, "description": "Malformed ID, price or size"},
    },
)
async def update_product(product_id: str, update_data: UpdateProductRequest, app: AppDep) -> UpdateResult:
    return await app.update_product(
        product_id, update_data.title, update_data.price, update_data.description, update_data.size
    )


@router.delete(
    "/products/{product_id}",
    summary="Delete product",
    description="Delete a product by ID.",
    operation_id="deleteProduct",
    dependencies=[MutationGuard],
    responses={
        200: {"description": "Delete result"},
        400: {"model": ErrorResponse, "description": "Malformed product ID"},
    },
)
async def delete_product(product_id: str, app: AppDep) -> DeleteResult:
    return await app.delete_product(product_id)
