from typing import List

from fastapi import APIRouter, Depends, Request

from app.api.deps import read_payload, validate_payload
from app.controllers.base import slugify
from app.controllers.catalog_controller import category_controller
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.core.s3_client import S3Client, get_s3_client
from app.core.security import get_current_admin
from app.mappers.catalog_mapper import EntityType, from_storage, to_storage
from app.schemas.basic_schemas import SuccessResponse
from app.schemas.category_schemas import (
    CategoryCreateSchema,
    CategoryInSchema,
    CategorySchema,
)
from app.services.catalog_images import (
    CATEGORIES_FOLDER,
    discard_replaced_image,
    store_image,
)

router = APIRouter()


@router.get("/categories", response_model=List[CategorySchema])
async def list_categories(db=Depends(get_db)):
    return [
        from_storage(EntityType.CATEGORY, item) for item in category_controller.list(db)
    ]


@router.get("/categories/{category_id}", response_model=CategorySchema)
async def get_category(category_id: str, db=Depends(get_db)):
    item = category_controller.get_by_id(db, category_id)
    if item is None:
        raise NotFoundError("Category not found")
    return from_storage(EntityType.CATEGORY, item)


@router.post(
    "/categories",
    response_model=CategorySchema,
    dependencies=[Depends(get_current_admin)],
)
async def create_category(
    request: Request,
    db=Depends(get_db),
    s3: S3Client = Depends(get_s3_client),
):
    """
    Creates a category. Names are unique regardless of case; a clash is a 400.
    """
    payload = await read_payload(request)
    data = validate_payload(CategoryCreateSchema, payload.fields).to_client_item()

    # Reject duplicates before anything is uploaded.
    category_controller.ensure_unique_name(db, data["name"])

    image = payload.file("image")
    if image:
        slug = data.get("slug") or slugify(data["name"])
        data["image"] = await store_image(s3, image, folder=CATEGORIES_FOLDER, slug=slug)

    item = category_controller.create(
        db, item=to_storage(EntityType.CATEGORY, data), check_name=False
    )
    return from_storage(EntityType.CATEGORY, item)


@router.put(
    "/categories/{category_id}",
    response_model=CategorySchema,
    dependencies=[Depends(get_current_admin)],
)
async def update_category(
    category_id: str,
    request: Request,
    db=Depends(get_db),
    s3: S3Client = Depends(get_s3_client),
):
    payload = await read_payload(request)
    data = validate_payload(CategoryInSchema, payload.fields).to_client_item()
    data.pop("id", None)

    existing = category_controller.get_by_id(db, category_id)
    if existing is None:
        raise NotFoundError("Category not found")
    category_controller.ensure_unique_name(db, data.get("name"), exclude_id=category_id)

    stale_image = None
    image = payload.file("image")
    if image:
        slug = data.get("slug") or slugify(data.get("name") or existing.get("name") or category_id)
        data["image"] = await store_image(s3, image, folder=CATEGORIES_FOLDER, slug=slug)
        stale_image = existing.get("image")

    item = category_controller.update(
        db, category_id, changes=to_storage(EntityType.CATEGORY, data), check_name=False
    )
    discard_replaced_image(s3, stale_image, item.get("image"))
    return from_storage(EntityType.CATEGORY, item)


@router.delete(
    "/categories/{category_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(get_current_admin)],
)
async def delete_category(category_id: str, db=Depends(get_db)):
    category_controller.delete(db, category_id)
    return {"success": True}
