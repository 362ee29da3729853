"""Pytest configuration and in-memory fakes for DynamoDB and the object store."""

import copy
import os

import pytest
from botocore.exceptions import ClientError

# Settings require these at import time; the values never reach a real service.
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("DYNAMODB_TABLE_SECTIONS", "test-sections")
os.environ.setdefault("DYNAMODB_TABLE_CATEGORIES", "test-categories")
os.environ.setdefault("DYNAMODB_TABLE_SUBCATEGORIES", "test-subcategories")
os.environ.setdefault("DYNAMODB_TABLE_PRODUCTS", "test-products")
os.environ.setdefault("DYNAMODB_TABLE_BANNERS", "test-banners")
os.environ.setdefault("R2_ENDPOINT", "https://r2.example.invalid")
os.environ.setdefault("R2_BUCKET_NAME", "catalog-test")
os.environ.setdefault("R2_PUBLIC_DOMAIN", "https://cdn.example.com")
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("ADMIN_PASSWORD", "secret")
os.environ.setdefault("REQUIRE_ADMIN_AUTH", "true")

ADMIN_AUTH = ("admin@example.com", "secret")


def _contains_float(value) -> bool:
    if isinstance(value, float):
        return True
    if isinstance(value, dict):
        return any(_contains_float(v) for v in value.values())
    if isinstance(value, list):
        return any(_contains_float(v) for v in value)
    return False


class FakeTable:
    """Dict-backed stand-in for a boto3 DynamoDB Table keyed by (PK, SK)."""

    def __init__(self, name, page_size=None):
        self.name = name
        self.page_size = page_size
        self.items = {}
        self.operations = []
        self.scan_calls = 0

    def scan(self, **kwargs):
        self.scan_calls += 1
        keys = sorted(self.items)
        start = kwargs.get("ExclusiveStartKey")
        index = keys.index((start["PK"], start["SK"])) + 1 if start else 0
        page = keys[index:] if not self.page_size else keys[index:index + self.page_size]
        response = {"Items": [copy.deepcopy(self.items[k]) for k in page]}
        if self.page_size and index + self.page_size < len(keys):
            response["LastEvaluatedKey"] = {"PK": page[-1][0], "SK": page[-1][1]}
        return response

    def get_item(self, Key):
        item = self.items.get((Key["PK"], Key["SK"]))
        return {"Item": copy.deepcopy(item)} if item is not None else {}

    def put_item(self, Item):
        if _contains_float(Item):
            raise TypeError("Float types are not supported. Use Decimal types instead.")
        key = (Item["PK"], Item["SK"])
        self.operations.append(("put", key))
        self.items[key] = copy.deepcopy(Item)
        return {}

    def delete_item(self, Key, ReturnValues="NONE"):
        key = (Key["PK"], Key["SK"])
        self.operations.append(("delete", key))
        old = self.items.pop(key, None)
        if old is not None and ReturnValues == "ALL_OLD":
            return {"Attributes": old}
        return {}


class FakeDynamoDB:
    """Stand-in for the boto3 DynamoDB service resource."""

    def __init__(self, page_size=None):
        self.page_size = page_size
        self.tables = {}

    def Table(self, name):
        if name not in self.tables:
            self.tables[name] = FakeTable(name, self.page_size)
        return self.tables[name]


class FailingTable:
    def _fail(self, operation):
        raise ClientError(
            {"Error": {"Code": "ResourceNotFoundException", "Message": "Requested resource not found"}},
            operation,
        )

    def scan(self, **kwargs):
        self._fail("Scan")

    def get_item(self, **kwargs):
        self._fail("GetItem")

    def put_item(self, **kwargs):
        self._fail("PutItem")

    def delete_item(self, **kwargs):
        self._fail("DeleteItem")


class FailingDynamoDB:
    def Table(self, name):
        return FailingTable()


class FakeBotoS3:
    """Records object puts and deletes made through the boto3 S3 client API."""

    def __init__(self):
        self.objects = {}
        self.deleted = []
        self.fail_deletes = False
        self.fail_puts = False

    def put_object(self, Bucket, Key, Body, ContentType):
        if self.fail_puts:
            raise ClientError({"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "PutObject")
        self.objects[Key] = {"Bucket": Bucket, "Body": Body, "ContentType": ContentType}
        return {}

    def delete_object(self, Bucket, Key):
        if self.fail_deletes:
            raise ClientError({"Error": {"Code": "InternalError", "Message": "boom"}}, "DeleteObject")
        self.deleted.append(Key)
        self.objects.pop(Key, None)
        return {}


@pytest.fixture
def fake_db():
    return FakeDynamoDB()


@pytest.fixture
def paged_db():
    return FakeDynamoDB(page_size=2)


@pytest.fixture
def failing_db():
    return FailingDynamoDB()


@pytest.fixture
def fake_boto_s3():
    return FakeBotoS3()


@pytest.fixture
def s3(fake_boto_s3):
    from app.core.s3_client import S3Client

    return S3Client(client=fake_boto_s3)


@pytest.fixture
def make_client(s3):
    """Builds a TestClient whose store and object storage are the given fakes."""
    from fastapi.testclient import TestClient

    from app.core.database import get_db
    from app.core.s3_client import get_s3_client
    from app.main import app

    def _make(db, auth=ADMIN_AUTH):
        app.dependency_overrides[get_db] = lambda: db
        app.dependency_overrides[get_s3_client] = lambda: s3
        client = TestClient(app)
        if auth is not None:
            client.auth = auth
        return client

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, fake_db):
    return make_client(fake_db)


@pytest.fixture
def anon_client(make_client, fake_db):
    return make_client(fake_db, auth=None)
