from pydantic import model_validator
from typing import Optional

from app.schemas.basic_schemas import EntityInSchema, EntitySchema, FormBool, FormInt


class SectionInSchema(EntityInSchema):
    id: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    imageUrl: Optional[str] = None
    icon: Optional[str] = None
    order: FormInt = None
    isActive: FormBool = None
    showOnHome: FormBool = None

    @model_validator(mode="before")
    @classmethod
    def _accept_image_key(cls, data):
        # Older clients send the URL as "image".
        if isinstance(data, dict) and data.get("imageUrl") is None and isinstance(data.get("image"), str):
            data = {**data, "imageUrl": data["image"]}
        return data


class SectionCreateSchema(SectionInSchema):
    name: str


class SectionSchema(EntitySchema):
    name: Optional[str] = None
    slug: Optional[str] = None
    imageUrl: Optional[str] = None
    icon: Optional[str] = None
    order: Optional[int] = None
    isActive: Optional[bool] = None
    showOnHome: Optional[bool] = None


class CategoryInSchema(EntityInSchema):
    id: Optional[str] = None
    sectionId: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    image: Optional[str] = None
    order: FormInt = None
    isActive: FormBool = None


class CategoryCreateSchema(CategoryInSchema):
    name: str


class CategorySchema(EntitySchema):
    sectionId: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    image: Optional[str] = None
    order: Optional[int] = None
    isActive: Optional[bool] = None


class SubcategoryInSchema(EntityInSchema):
    id: Optional[str] = None
    categoryId: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    order: FormInt = None
    isActive: FormBool = None


class SubcategoryCreateSchema(SubcategoryInSchema):
    categoryId: str
    name: str


class SubcategorySchema(EntitySchema):
    categoryId: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    order: Optional[int] = None
    isActive: Optional[bool] = None
