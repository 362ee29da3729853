# app/controllers/catalog_controller.py

import logging
from typing import Dict, Optional

from app.controllers.base import CatalogController, StorageItem
from app.core.config import settings
from app.core.errors import NotFoundError, ValidationError
from app.mappers.catalog_mapper import EntityType

log = logging.getLogger(__name__)


class CategoryController(CatalogController):
    unique_names = True


class SubcategoryController(CatalogController):
    """
    Subcategories live under their parent category:
    PK = CATEGORY#<categoryId>, SK = SUBCATEGORY#<subcategoryId>.
    The id alone does not address an item, so lookups by id scan the table.
    """

    unique_names = True

    def build_key(self, item: StorageItem) -> Dict[str, str]:
        category_id = item.get("categoryId")
        if not category_id:
            raise ValidationError("categoryId is required")
        return {
            "PK": f"{EntityType.CATEGORY.value}#{category_id}",
            "SK": f"{EntityType.SUBCATEGORY.value}#{item[self.identity_field]}",
        }

    def get_by_id(self, db, id: str) -> Optional[StorageItem]:
        for item in self.list(db):
            if item.get(self.identity_field) == id:
                return item
        return None

    def update(
        self, db, id: str, *, changes: StorageItem, check_name: bool = True
    ) -> StorageItem:
        """
        Moving a subcategory to another category changes its address: the old
        item is deleted first, then the new one is written. The two steps are
        not atomic; a reader in between sees no subcategory.
        """
        existing = self.get_by_id(db, id)
        if existing is None:
            raise NotFoundError(f"{self.label} not found")

        merged = self._merge(existing, id, changes)
        if check_name:
            self.ensure_unique_name(db, merged.get("name"), exclude_id=id)
        new_key = self.build_key(merged)
        old_key = {"PK": existing.get("PK"), "SK": existing.get("SK")}

        if old_key != new_key:
            log.info(
                "Moving %s %s from %s to %s", self.label, id, old_key["PK"], new_key["PK"]
            )
            self._delete_key(db, old_key)

        merged.update(new_key)
        log.info("Updating %s %s", self.label, id)
        return self._put(db, merged)

    def delete(self, db, id: str) -> bool:
        item = self.get_by_id(db, id)
        if item is None:
            log.info("Deleted %s %s (existed=False)", self.label, id)
            return False
        return self._delete_key(db, {"PK": item["PK"], "SK": item["SK"]})


# Instantiate the controller classes to be used in your API endpoints
section_controller = CatalogController(EntityType.SECTION, settings.DYNAMODB_TABLE_SECTIONS)
category_controller = CategoryController(
    EntityType.CATEGORY, settings.DYNAMODB_TABLE_CATEGORIES
)
subcategory_controller = SubcategoryController(
    EntityType.SUBCATEGORY, settings.DYNAMODB_TABLE_SUBCATEGORIES
)
product_controller = CatalogController(EntityType.PRODUCT, settings.DYNAMODB_TABLE_PRODUCTS)
banner_controller = CatalogController(EntityType.BANNER, settings.DYNAMODB_TABLE_BANNERS)
