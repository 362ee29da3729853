# app/controllers/base.py

import logging
import re
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from app.core.errors import NotFoundError, StoreError, ValidationError
from app.mappers.catalog_mapper import IDENTITY_FIELDS, EntityType

log = logging.getLogger(__name__)

META_SORT_KEY = "META"

StorageItem = Dict[str, Any]


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T10:00:00.000Z."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def slugify(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


def to_dynamo(value: Any) -> Any:
    """Converts floats to Decimal, recursively; the document model rejects floats."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_dynamo(v) for v in value]
    return value


def from_dynamo(value: Any) -> Any:
    """Converts Decimal back to int or float, recursively."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamo(v) for v in value]
    return value


@contextmanager
def store_errors(action: str, table_name: str) -> Iterator[None]:
    try:
        yield
    except (BotoCoreError, ClientError) as e:
        log.error("Error %s table %s: %s", action, table_name, e)
        raise StoreError(str(e)) from e


class CatalogController:
    """
    A generic controller for one catalog entity table.
    It provides create, read, update, and delete over (PK, SK) addressed items.

    Items go in and come out in storage shape (see app.mappers.catalog_mapper);
    `db` is the DynamoDB service resource.
    """

    # Enforce case-insensitive name uniqueness on writes.
    unique_names = False

    def __init__(self, entity_type: EntityType, table_name: str):
        self.entity_type = EntityType(entity_type)
        self.table_name = table_name

    @property
    def identity_field(self) -> str:
        return IDENTITY_FIELDS[self.entity_type]

    @property
    def label(self) -> str:
        return self.entity_type.value.capitalize()

    def _table(self, db):
        return db.Table(self.table_name)

    def build_key(self, item: StorageItem) -> Dict[str, str]:
        return {
            "PK": f"{self.entity_type.value}#{item[self.identity_field]}",
            "SK": META_SORT_KEY,
        }

    # --- raw table access ---

    def list(self, db) -> List[StorageItem]:
        """
        Scans the whole table, following pagination. No ordering is guaranteed.
        """
        table = self._table(db)
        items: List[StorageItem] = []
        scan_kwargs: Dict[str, Any] = {}
        with store_errors("scanning", self.table_name):
            while True:
                response = table.scan(**scan_kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key
        return [from_dynamo(item) for item in items]

    def get(self, db, key: Dict[str, str]) -> Optional[StorageItem]:
        """
        Point lookup by (PK, SK). A missing item is returned as None.
        """
        with store_errors("reading from", self.table_name):
            response = self._table(db).get_item(Key=key)
        item = response.get("Item")
        return from_dynamo(item) if item is not None else None

    def _put(self, db, item: StorageItem) -> StorageItem:
        with store_errors("writing to", self.table_name):
            self._table(db).put_item(Item=to_dynamo(item))
        return item

    def _delete_key(self, db, key: Dict[str, str]) -> bool:
        with store_errors("deleting from", self.table_name):
            response = self._table(db).delete_item(Key=key, ReturnValues="ALL_OLD")
        return bool(response.get("Attributes"))

    # --- entity operations ---

    def get_by_id(self, db, id: str) -> Optional[StorageItem]:
        return self.get(db, self.build_key({self.identity_field: id}))

    def ensure_unique_name(self, db, name: Optional[str], exclude_id: Optional[str] = None) -> None:
        """
        Rejects a name that another item already carries, ignoring case.
        This is a scan followed by a separate write, so concurrent writers can
        still both pass it.
        """
        if not self.unique_names or not name:
            return
        wanted = name.lower()
        for item in self.list(db):
            if item.get(self.identity_field) == exclude_id:
                continue
            if str(item.get("name") or "").lower() == wanted:
                raise ValidationError(f"{self.label} with this name already exists")

    def _prepare(self, item: StorageItem) -> StorageItem:
        if not item.get("slug") and item.get("name"):
            item["slug"] = slugify(item["name"])
        return item

    def create(self, db, *, item: StorageItem, check_name: bool = True) -> StorageItem:
        """
        Creates a new item, generating its id when the caller did not supply one.
        Pass `check_name=False` when the caller already ran `ensure_unique_name`.
        """
        data = dict(item)
        data[self.identity_field] = data.get(self.identity_field) or str(uuid.uuid4())
        if check_name:
            self.ensure_unique_name(db, data.get("name"))

        timestamp = utc_timestamp()
        data["createdAt"] = timestamp
        data["updatedAt"] = timestamp
        data = self._prepare(data)
        data.update(self.build_key(data))

        log.info("Saving %s %s", self.label, data[self.identity_field])
        return self._put(db, data)

    def _merge(self, existing: StorageItem, id: str, changes: StorageItem) -> StorageItem:
        merged = {**existing, **changes}
        merged[self.identity_field] = id
        merged["createdAt"] = existing.get("createdAt") or utc_timestamp()
        merged["updatedAt"] = utc_timestamp()
        return self._prepare(merged)

    def update(
        self, db, id: str, *, changes: StorageItem, check_name: bool = True
    ) -> StorageItem:
        """
        Overwrites the stored item with the existing attributes merged with
        `changes`. `createdAt` is kept; `updatedAt` is refreshed.
        """
        existing = self.get_by_id(db, id)
        if existing is None:
            raise NotFoundError(f"{self.label} not found")

        merged = self._merge(existing, id, changes)
        if check_name:
            self.ensure_unique_name(db, merged.get("name"), exclude_id=id)
        merged.update(self.build_key(merged))

        log.info("Updating %s %s", self.label, id)
        return self._put(db, merged)

    def delete(self, db, id: str) -> bool:
        """
        Removes the item. Returns whether an item was there to remove.
        """
        existed = self._delete_key(db, self.build_key({self.identity_field: id}))
        log.info("Deleted %s %s (existed=%s)", self.label, id, existed)
        return existed
