from enum import Enum
from typing import Optional

from pydantic import model_validator

from app.core.errors import ValidationError
from app.schemas.basic_schemas import EntityInSchema, EntitySchema, FormBool, FormInt


class BannerPosition(str, Enum):
    HOME_HERO = "HOME_HERO"
    HOME_MIDDLE = "HOME_MIDDLE"
    HOME_BOTTOM = "HOME_BOTTOM"
    CATEGORY_TOP = "CATEGORY_TOP"
    PRODUCT_SIDEBAR = "PRODUCT_SIDEBAR"


class RedirectType(str, Enum):
    NONE = "NONE"
    CATEGORY = "CATEGORY"
    PRODUCT = "PRODUCT"


CATEGORY_TOP_MESSAGE = "categoryId is required for CATEGORY_TOP banners"


def needs_category(position, category_id) -> bool:
    return position == BannerPosition.CATEGORY_TOP and not category_id


def ensure_banner_category(position, category_id) -> None:
    """Checks the stored-plus-changed banner on update; a PUT need not resend categoryId."""
    if needs_category(position, category_id):
        raise ValidationError(CATEGORY_TOP_MESSAGE)


class BannerInSchema(EntityInSchema):
    id: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    image: Optional[str] = None
    position: Optional[BannerPosition] = None
    order: FormInt = None
    isActive: FormBool = None
    redirectType: Optional[RedirectType] = None
    redirectValue: Optional[str] = None
    categoryId: Optional[str] = None


class BannerCreateSchema(BannerInSchema):
    title: str

    @model_validator(mode="after")
    def _category_top_needs_category(self):
        if needs_category(self.position, self.categoryId):
            raise ValueError(CATEGORY_TOP_MESSAGE)
        return self


class BannerSchema(EntitySchema):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    image: str = ""
    position: Optional[str] = None
    order: Optional[int] = None
    isActive: Optional[bool] = None
    redirectType: Optional[str] = None
    redirectValue: Optional[str] = None
    categoryId: Optional[str] = None
