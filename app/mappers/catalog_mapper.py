"""Client <-> storage shapes of the catalog entities.

Each entity is stored under its own identity attribute (``categoryId``,
``productId``...) while the admin client works with ``id``; a few entities
also rename image fields. Products keep their specs as an ordered list of
``{key, value}`` pairs on the client and as a key -> value map in storage.

The specs conversion is lossy: duplicate keys collapse (last one wins) and the
list comes back in map order.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping


class EntityType(str, Enum):
    SECTION = "SECTION"
    CATEGORY = "CATEGORY"
    SUBCATEGORY = "SUBCATEGORY"
    PRODUCT = "PRODUCT"
    BANNER = "BANNER"


IDENTITY_FIELDS = {
    EntityType.SECTION: "sectionId",
    EntityType.CATEGORY: "categoryId",
    EntityType.SUBCATEGORY: "subcategoryId",
    EntityType.PRODUCT: "productId",
    EntityType.BANNER: "bannerId",
}

# client field -> storage field
FIELD_ALIASES = {
    EntityType.SECTION: {"imageUrl": "image"},
    EntityType.PRODUCT: {"thumbnailUrl": "thumbnailImg", "imageUrls": "images"},
}

KEY_FIELDS = ("PK", "SK")


def specs_to_map(specs: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Collapses `[{key, value}, ...]` into a map; empty keys are dropped, last key wins."""
    result: Dict[str, Any] = {}
    for spec in specs or []:
        key = spec.get("key")
        if key:
            result[key] = spec.get("value")
    return result


def specs_from_map(specs: Mapping[str, Any]) -> List[Dict[str, Any]]:
    return [{"key": key, "value": value} for key, value in (specs or {}).items()]


def to_storage(entity_type: EntityType, client_item: Mapping[str, Any]) -> Dict[str, Any]:
    """Maps a client-shaped entity to its storage attributes (without PK/SK)."""
    entity_type = EntityType(entity_type)
    item = dict(client_item)

    identity = IDENTITY_FIELDS[entity_type]
    if "id" in item:
        item[identity] = item.pop("id")

    for client_name, storage_name in FIELD_ALIASES.get(entity_type, {}).items():
        if client_name in item:
            item[storage_name] = item.pop(client_name)

    if entity_type is EntityType.PRODUCT and "specs" in item:
        item["specs"] = specs_to_map(item["specs"])

    return item


def from_storage(entity_type: EntityType, storage_item: Mapping[str, Any]) -> Dict[str, Any]:
    """Maps a stored item back to the client shape, dropping the PK/SK attributes."""
    entity_type = EntityType(entity_type)
    item = {k: v for k, v in storage_item.items() if k not in KEY_FIELDS}

    identity = IDENTITY_FIELDS[entity_type]
    if identity in item:
        item["id"] = item.pop(identity)

    for client_name, storage_name in FIELD_ALIASES.get(entity_type, {}).items():
        if storage_name in item:
            item[client_name] = item.pop(storage_name)

    if entity_type is EntityType.PRODUCT:
        item["imageUrls"] = item.get("imageUrls") or []
        item["specs"] = specs_from_map(item.get("specs"))
    elif entity_type is EntityType.BANNER:
        item["image"] = item.get("image") or ""

    return item
