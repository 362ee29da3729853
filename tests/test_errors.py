import json

from app.core.errors import (
    CatalogError,
    NotFoundError,
    StorageError,
    StoreError,
    ValidationError,
    create_error_response,
)


def test_status_codes():
    assert ValidationError("bad").status_code == 400
    assert NotFoundError("missing").status_code == 404
    assert StoreError("down").status_code == 500
    assert StorageError("down").status_code == 500
    assert issubclass(StoreError, CatalogError)


def test_error_body_shape():
    response = create_error_response(ValidationError("Category with this name already exists"))
    assert response.status_code == 400
    assert json.loads(response.body) == {"error": "Category with this name already exists"}


def test_store_error_over_http(make_client, failing_db):
    client = make_client(failing_db)

    response = client.get("/api/products")

    assert response.status_code == 500
    assert "Requested resource not found" in response.json()["error"]
