import uuid
from typing import List

from fastapi import APIRouter, Depends, Request

from app.api.deps import read_payload, validate_payload
from app.controllers.base import slugify
from app.controllers.catalog_controller import banner_controller
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.core.s3_client import S3Client, get_s3_client
from app.core.security import get_current_admin
from app.mappers.catalog_mapper import EntityType, from_storage, to_storage
from app.schemas.banner_schemas import (
    BannerCreateSchema,
    BannerInSchema,
    BannerSchema,
    ensure_banner_category,
)
from app.schemas.basic_schemas import SuccessResponse
from app.services.catalog_images import (
    BANNERS_FOLDER,
    discard_replaced_image,
    store_image,
)

router = APIRouter()


@router.get("/banners", response_model=List[BannerSchema])
async def list_banners(db=Depends(get_db)):
    return [from_storage(EntityType.BANNER, item) for item in banner_controller.list(db)]


@router.get("/banners/{banner_id}", response_model=BannerSchema)
async def get_banner(banner_id: str, db=Depends(get_db)):
    item = banner_controller.get_by_id(db, banner_id)
    if item is None:
        raise NotFoundError("Banner not found")
    return from_storage(EntityType.BANNER, item)


@router.post(
    "/banners",
    response_model=BannerSchema,
    dependencies=[Depends(get_current_admin)],
)
async def create_banner(
    request: Request,
    db=Depends(get_db),
    s3: S3Client = Depends(get_s3_client),
):
    """
    Creates a banner. `image` may be a file or an already hosted URL.
    CATEGORY_TOP banners must name their category.
    """
    payload = await read_payload(request)
    data = validate_payload(BannerCreateSchema, payload.fields).to_client_item()
    data["id"] = data.get("id") or str(uuid.uuid4())

    image = payload.file("image")
    if image:
        slug = slugify(data["title"]) or data["id"]
        data["image"] = await store_image(s3, image, folder=BANNERS_FOLDER, slug=slug)

    item = banner_controller.create(db, item=to_storage(EntityType.BANNER, data))
    return from_storage(EntityType.BANNER, item)


@router.put(
    "/banners/{banner_id}",
    response_model=BannerSchema,
    dependencies=[Depends(get_current_admin)],
)
async def update_banner(
    banner_id: str,
    request: Request,
    db=Depends(get_db),
    s3: S3Client = Depends(get_s3_client),
):
    payload = await read_payload(request)
    data = validate_payload(BannerInSchema, payload.fields).to_client_item()
    data.pop("id", None)

    existing = banner_controller.get_by_id(db, banner_id)
    if existing is None:
        raise NotFoundError("Banner not found")
    ensure_banner_category(
        data.get("position", existing.get("position")),
        data.get("categoryId") or existing.get("categoryId"),
    )

    stale_image = None
    image = payload.file("image")
    if image:
        slug = slugify(data.get("title") or "") or banner_id
        data["image"] = await store_image(s3, image, folder=BANNERS_FOLDER, slug=slug)
        stale_image = existing.get("image")

    item = banner_controller.update(db, banner_id, changes=to_storage(EntityType.BANNER, data))
    discard_replaced_image(s3, stale_image, item.get("image"))
    return from_storage(EntityType.BANNER, item)


@router.delete(
    "/banners/{banner_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(get_current_admin)],
)
async def delete_banner(banner_id: str, db=Depends(get_db)):
    banner_controller.delete(db, banner_id)
    return {"success": True}
