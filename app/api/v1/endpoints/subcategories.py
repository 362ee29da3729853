from typing import List

from fastapi import APIRouter, Depends, Request

from app.api.deps import read_payload, validate_payload
from app.controllers.catalog_controller import subcategory_controller
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.core.security import get_current_admin
from app.mappers.catalog_mapper import EntityType, from_storage, to_storage
from app.schemas.basic_schemas import SuccessResponse
from app.schemas.category_schemas import (
    SubcategoryCreateSchema,
    SubcategoryInSchema,
    SubcategorySchema,
)

router = APIRouter()


@router.get("/subcategories", response_model=List[SubcategorySchema])
async def list_subcategories(db=Depends(get_db)):
    return [
        from_storage(EntityType.SUBCATEGORY, item)
        for item in subcategory_controller.list(db)
    ]


@router.get("/subcategories/{subcategory_id}", response_model=SubcategorySchema)
async def get_subcategory(subcategory_id: str, db=Depends(get_db)):
    item = subcategory_controller.get_by_id(db, subcategory_id)
    if item is None:
        raise NotFoundError("Subcategory not found")
    return from_storage(EntityType.SUBCATEGORY, item)


@router.post(
    "/subcategories",
    response_model=SubcategorySchema,
    dependencies=[Depends(get_current_admin)],
)
async def create_subcategory(request: Request, db=Depends(get_db)):
    payload = await read_payload(request)
    data = validate_payload(SubcategoryCreateSchema, payload.fields).to_client_item()
    item = subcategory_controller.create(db, item=to_storage(EntityType.SUBCATEGORY, data))
    return from_storage(EntityType.SUBCATEGORY, item)


@router.put(
    "/subcategories/{subcategory_id}",
    response_model=SubcategorySchema,
    dependencies=[Depends(get_current_admin)],
)
async def update_subcategory(subcategory_id: str, request: Request, db=Depends(get_db)):
    """
    Updates a subcategory. A different `categoryId` moves the item under the
    new category.
    """
    payload = await read_payload(request)
    data = validate_payload(SubcategoryInSchema, payload.fields).to_client_item()
    data.pop("id", None)
    item = subcategory_controller.update(
        db, subcategory_id, changes=to_storage(EntityType.SUBCATEGORY, data)
    )
    return from_storage(EntityType.SUBCATEGORY, item)


@router.delete(
    "/subcategories/{subcategory_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(get_current_admin)],
)
async def delete_subcategory(subcategory_id: str, db=Depends(get_db)):
    subcategory_controller.delete(db, subcategory_id)
    return {"success": True}
