from typing import List, Optional

from app.schemas.basic_schemas import (
    EntityInSchema,
    EntitySchema,
    FormBool,
    FormFloat,
    FormSpecs,
    FormStrList,
    SpecSchema,
)


class ProductInSchema(EntityInSchema):
    id: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    categoryId: Optional[str] = None
    subcategoryId: Optional[str] = None
    description: Optional[str] = None
    thumbnailUrl: Optional[str] = None
    imageUrls: FormStrList = None
    specs: FormSpecs = None
    isActive: FormBool = None
    isNewArrival: FormBool = None
    isBestSeller: FormBool = None
    isFeatured: FormBool = None
    isTrending: FormBool = None
    isPremium: FormBool = None
    isRecommended: FormBool = None
    isOnOffer: FormBool = None
    isCustomOrder: FormBool = None
    isInStock: FormBool = None
    offerText: Optional[str] = None
    rating: FormFloat = None


class ProductCreateSchema(ProductInSchema):
    name: str


class ProductSchema(EntitySchema):
    name: Optional[str] = None
    slug: Optional[str] = None
    categoryId: Optional[str] = None
    subcategoryId: Optional[str] = None
    description: Optional[str] = None
    thumbnailUrl: Optional[str] = None
    imageUrls: List[str] = []
    specs: List[SpecSchema] = []
    isActive: Optional[bool] = None
    isNewArrival: Optional[bool] = None
    isBestSeller: Optional[bool] = None
    isFeatured: Optional[bool] = None
    isTrending: Optional[bool] = None
    isPremium: Optional[bool] = None
    isRecommended: Optional[bool] = None
    isOnOffer: Optional[bool] = None
    isCustomOrder: Optional[bool] = None
    isInStock: Optional[bool] = None
    offerText: Optional[str] = None
    rating: Optional[float] = None
