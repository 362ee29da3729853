from typing import List

from fastapi import APIRouter, Depends, Request

from app.api.deps import RequestPayload, read_payload, validate_payload
from app.controllers.base import slugify
from app.controllers.catalog_controller import product_controller
from app.core.config import settings
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.core.s3_client import S3Client, get_s3_client
from app.core.security import get_current_admin
from app.mappers.catalog_mapper import EntityType, from_storage, to_storage
from app.schemas.basic_schemas import SuccessResponse
from app.schemas.product_schemas import (
    ProductCreateSchema,
    ProductInSchema,
    ProductSchema,
)
from app.services.catalog_images import (
    PRODUCTS_FOLDER,
    check_gallery,
    check_image,
    discard_replaced_image,
    store_gallery,
    store_image,
)

router = APIRouter()


async def _upload_product_images(
    s3: S3Client, payload: RequestPayload, data: dict, slug: str, current_images: List[str]
) -> None:
    """Uploads `thumbnail` and `images` files into `data`; gallery uploads are appended."""
    thumbnail = payload.file("thumbnail")
    gallery = payload.files.get("images")
    # Reject the request before anything reaches the bucket.
    if thumbnail:
        check_image(thumbnail)
    if gallery:
        check_gallery(gallery, settings.MAX_GALLERY_IMAGES)

    if thumbnail:
        data["thumbnailUrl"] = await store_image(
            s3, thumbnail, folder=PRODUCTS_FOLDER, slug=slug, tag="thumb"
        )

    if gallery:
        new_images = await store_gallery(
            s3, gallery, slug=slug, limit=settings.MAX_GALLERY_IMAGES
        )
        data["imageUrls"] = list(current_images) + new_images


@router.get("/products", response_model=List[ProductSchema])
async def list_products(db=Depends(get_db)):
    return [from_storage(EntityType.PRODUCT, item) for item in product_controller.list(db)]


@router.get("/products/{product_id}", response_model=ProductSchema)
async def get_product(product_id: str, db=Depends(get_db)):
    item = product_controller.get_by_id(db, product_id)
    if item is None:
        raise NotFoundError("Product not found")
    return from_storage(EntityType.PRODUCT, item)


@router.post(
    "/products",
    response_model=ProductSchema,
    dependencies=[Depends(get_current_admin)],
)
async def create_product(
    request: Request,
    db=Depends(get_db),
    s3: S3Client = Depends(get_s3_client),
):
    """
    Creates a product from a multipart form: a `thumbnail` file, up to five
    `images` files and the scalar fields, with `specs` as a JSON string.
    Specs with repeated keys keep only the last value.
    """
    payload = await read_payload(request)
    data = validate_payload(ProductCreateSchema, payload.fields).to_client_item()

    slug = data.get("slug") or slugify(data["name"])
    await _upload_product_images(s3, payload, data, slug, data.get("imageUrls") or [])

    item = product_controller.create(db, item=to_storage(EntityType.PRODUCT, data))
    return from_storage(EntityType.PRODUCT, item)


@router.put(
    "/products/{product_id}",
    response_model=ProductSchema,
    dependencies=[Depends(get_current_admin)],
)
async def update_product(
    product_id: str,
    request: Request,
    db=Depends(get_db),
    s3: S3Client = Depends(get_s3_client),
):
    payload = await read_payload(request)
    data = validate_payload(ProductInSchema, payload.fields).to_client_item()
    data.pop("id", None)

    existing = product_controller.get_by_id(db, product_id)
    if existing is None:
        raise NotFoundError("Product not found")

    slug = data.get("slug") or slugify(data.get("name") or existing.get("name") or product_id)
    current_images = data.get("imageUrls")
    if current_images is None:
        current_images = existing.get("images") or []
    await _upload_product_images(s3, payload, data, slug, current_images)
    stale_thumbnail = existing.get("thumbnailImg") if payload.file("thumbnail") else None

    item = product_controller.update(
        db, product_id, changes=to_storage(EntityType.PRODUCT, data)
    )
    discard_replaced_image(s3, stale_thumbnail, item.get("thumbnailImg"))
    return from_storage(EntityType.PRODUCT, item)


@router.delete(
    "/products/{product_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(get_current_admin)],
)
async def delete_product(product_id: str, db=Depends(get_db)):
    product_controller.delete(db, product_id)
    return {"success": True}
