from typing import List

from fastapi import APIRouter, Depends, Request

from app.api.deps import read_payload, validate_payload
from app.controllers.base import slugify
from app.controllers.catalog_controller import section_controller
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.core.s3_client import S3Client, get_s3_client
from app.core.security import get_current_admin
from app.mappers.catalog_mapper import EntityType, from_storage, to_storage
from app.schemas.basic_schemas import SuccessResponse
from app.schemas.category_schemas import (
    SectionCreateSchema,
    SectionInSchema,
    SectionSchema,
)
from app.services.catalog_images import (
    SECTIONS_FOLDER,
    discard_replaced_image,
    store_image,
)

router = APIRouter()


@router.get("/sections", response_model=List[SectionSchema])
async def list_sections(db=Depends(get_db)):
    return [from_storage(EntityType.SECTION, item) for item in section_controller.list(db)]


@router.get("/sections/{section_id}", response_model=SectionSchema)
async def get_section(section_id: str, db=Depends(get_db)):
    item = section_controller.get_by_id(db, section_id)
    if item is None:
        raise NotFoundError("Section not found")
    return from_storage(EntityType.SECTION, item)


@router.post(
    "/sections",
    response_model=SectionSchema,
    dependencies=[Depends(get_current_admin)],
)
async def create_section(
    request: Request,
    db=Depends(get_db),
    s3: S3Client = Depends(get_s3_client),
):
    """
    Creates a section from a multipart form (optional `image` file) or JSON.
    """
    payload = await read_payload(request)
    data = validate_payload(SectionCreateSchema, payload.fields).to_client_item()

    image = payload.file("image")
    if image:
        slug = data.get("slug") or slugify(data["name"])
        data["imageUrl"] = await store_image(s3, image, folder=SECTIONS_FOLDER, slug=slug)

    item = section_controller.create(db, item=to_storage(EntityType.SECTION, data))
    return from_storage(EntityType.SECTION, item)


@router.put(
    "/sections/{section_id}",
    response_model=SectionSchema,
    dependencies=[Depends(get_current_admin)],
)
async def update_section(
    section_id: str,
    request: Request,
    db=Depends(get_db),
    s3: S3Client = Depends(get_s3_client),
):
    payload = await read_payload(request)
    data = validate_payload(SectionInSchema, payload.fields).to_client_item()
    data.pop("id", None)

    existing = section_controller.get_by_id(db, section_id)
    if existing is None:
        raise NotFoundError("Section not found")

    stale_image = None
    image = payload.file("image")
    if image:
        slug = data.get("slug") or slugify(data.get("name") or existing.get("name") or section_id)
        data["imageUrl"] = await store_image(s3, image, folder=SECTIONS_FOLDER, slug=slug)
        stale_image = existing.get("image")

    item = section_controller.update(
        db, section_id, changes=to_storage(EntityType.SECTION, data)
    )
    discard_replaced_image(s3, stale_image, item.get("image"))
    return from_storage(EntityType.SECTION, item)


@router.delete(
    "/sections/{section_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(get_current_admin)],
)
async def delete_section(section_id: str, db=Depends(get_db)):
    section_controller.delete(db, section_id)
    return {"success": True}
