"""Catalog error taxonomy and the handler that renders it.

Controllers and services raise these; the API layer turns every one of them
into ``{"error": "<message>"}`` with the matching status code, the shape the
admin client reads.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

log = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(CatalogError):
    """Duplicate name, missing required field or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreError(CatalogError):
    """The document store failed; the backend message is passed through."""


class StorageError(CatalogError):
    """The object store failed to accept an upload."""


def create_error_response(error: CatalogError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return create_error_response(exc)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
