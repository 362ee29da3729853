import pytest

from app.mappers.catalog_mapper import (
    EntityType,
    from_storage,
    specs_from_map,
    specs_to_map,
    to_storage,
)

CLIENT_ITEMS = {
    EntityType.SECTION: {
        "id": "s1",
        "name": "Living",
        "slug": "living",
        "imageUrl": "https://cdn.example.com/sections/living-1.jpg",
        "icon": "sofa",
        "order": 1,
        "isActive": True,
        "showOnHome": False,
    },
    EntityType.CATEGORY: {
        "id": "c1",
        "sectionId": "s1",
        "name": "Office Furniture",
        "slug": "office-furniture",
        "image": "https://cdn.example.com/category/office-1.png",
        "order": 2,
        "isActive": True,
    },
    EntityType.SUBCATEGORY: {
        "id": "sc1",
        "categoryId": "c1",
        "name": "Desks",
        "slug": "desks",
        "order": 1,
        "isActive": True,
    },
    EntityType.PRODUCT: {
        "id": "p1",
        "name": "Teak Chair",
        "categoryId": "c1",
        "subcategoryId": "sc1",
        "thumbnailUrl": "https://cdn.example.com/products/teak-chair-thumb-1.jpg",
        "imageUrls": ["https://cdn.example.com/products/a.jpg", "https://cdn.example.com/products/b.jpg"],
        "specs": [{"key": "Material", "value": "Teak"}, {"key": "Color", "value": "Brown"}],
        "isActive": True,
        "rating": 4.5,
    },
    EntityType.BANNER: {
        "id": "b1",
        "title": "Summer Sale",
        "image": "https://cdn.example.com/banners/summer-sale-1.jpg",
        "position": "HOME_HERO",
        "redirectType": "NONE",
        "order": 1,
        "isActive": True,
    },
}


@pytest.mark.parametrize("entity_type", list(EntityType))
def test_storage_round_trip_is_identity(entity_type):
    item = CLIENT_ITEMS[entity_type]
    assert from_storage(entity_type, to_storage(entity_type, item)) == item


class TestToStorage:
    def test_id_becomes_identity_attribute(self):
        stored = to_storage(EntityType.CATEGORY, {"id": "c1", "name": "Beds"})
        assert stored == {"categoryId": "c1", "name": "Beds"}

    def test_section_image_is_renamed(self):
        stored = to_storage(EntityType.SECTION, CLIENT_ITEMS[EntityType.SECTION])
        assert stored["image"] == CLIENT_ITEMS[EntityType.SECTION]["imageUrl"]
        assert "imageUrl" not in stored
        assert stored["sectionId"] == "s1"

    def test_product_fields_are_renamed(self):
        stored = to_storage(EntityType.PRODUCT, CLIENT_ITEMS[EntityType.PRODUCT])
        assert stored["productId"] == "p1"
        assert stored["thumbnailImg"].endswith("teak-chair-thumb-1.jpg")
        assert len(stored["images"]) == 2
        assert stored["specs"] == {"Material": "Teak", "Color": "Brown"}
        # Parent references keep their names.
        assert stored["categoryId"] == "c1"
        assert stored["subcategoryId"] == "sc1"

    def test_input_is_not_mutated(self):
        item = {"id": "p1", "specs": [{"key": "Material", "value": "Oak"}]}
        to_storage(EntityType.PRODUCT, item)
        assert item == {"id": "p1", "specs": [{"key": "Material", "value": "Oak"}]}

    def test_partial_item_without_id(self):
        assert to_storage(EntityType.PRODUCT, {"name": "Desk"}) == {"name": "Desk"}


class TestFromStorage:
    def test_key_attributes_are_dropped(self):
        item = from_storage(
            EntityType.CATEGORY,
            {"PK": "CATEGORY#c1", "SK": "META", "categoryId": "c1", "name": "Beds"},
        )
        assert item == {"id": "c1", "name": "Beds"}

    def test_product_defaults(self):
        item = from_storage(EntityType.PRODUCT, {"productId": "p1", "name": "Desk"})
        assert item["imageUrls"] == []
        assert item["specs"] == []

    def test_banner_image_defaults_to_empty_string(self):
        item = from_storage(EntityType.BANNER, {"bannerId": "b1", "title": "Sale"})
        assert item["image"] == ""


class TestSpecs:
    def test_duplicate_keys_collapse_last_wins(self):
        specs = [{"key": "Material", "value": "Teak"}, {"key": "Material", "value": "Oak"}]
        assert specs_to_map(specs) == {"Material": "Oak"}

        stored = to_storage(EntityType.PRODUCT, {"id": "p1", "specs": specs})
        assert from_storage(EntityType.PRODUCT, stored)["specs"] == [
            {"key": "Material", "value": "Oak"}
        ]

    def test_empty_keys_are_dropped(self):
        specs = [{"key": "", "value": "x"}, {"key": "Width", "value": "80cm"}]
        assert specs_to_map(specs) == {"Width": "80cm"}

    def test_missing_specs(self):
        assert specs_to_map(None) == {}
        assert specs_from_map(None) == []
