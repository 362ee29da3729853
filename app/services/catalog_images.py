# app/services/catalog_images.py

import logging
from typing import List, Optional

from starlette.datastructures import UploadFile

from app.core.errors import ValidationError
from app.core.s3_client import S3Client, build_object_key

log = logging.getLogger(__name__)

SECTIONS_FOLDER = "sections"
CATEGORIES_FOLDER = "category"
PRODUCTS_FOLDER = "products"
BANNERS_FOLDER = "banners"


def check_image(upload: UploadFile) -> None:
    if not (upload.content_type or "").startswith("image/"):
        raise ValidationError("Invalid file type. Only images are allowed.")


def check_gallery(uploads: List[UploadFile], limit: int) -> None:
    """Validates a whole gallery before any of it is uploaded."""
    if len(uploads) > limit:
        raise ValidationError(f"At most {limit} gallery images can be uploaded at once")
    for upload in uploads:
        check_image(upload)


async def store_image(
    s3: S3Client,
    upload: UploadFile,
    *,
    folder: str,
    slug: str,
    tag: str = "",
    unique: bool = False,
) -> str:
    """
    Uploads one image and returns its public URL.
    The object is not removed again if a later step of the request fails.
    """
    check_image(upload)

    body = await upload.read()
    key = build_object_key(folder, slug, upload.content_type, tag=tag, unique=unique)
    return s3.upload_bytes(body, key, upload.content_type)


async def store_gallery(
    s3: S3Client, uploads: List[UploadFile], *, slug: str, limit: int
) -> List[str]:
    check_gallery(uploads, limit)

    log.info("Uploading %d product gallery images", len(uploads))
    return [
        await store_image(s3, upload, folder=PRODUCTS_FOLDER, slug=slug, unique=True)
        for upload in uploads
    ]


def discard_replaced_image(s3: S3Client, old_url: Optional[str], new_url: Optional[str]) -> None:
    """Removes the previous object once its replacement is stored; best-effort."""
    if old_url and old_url != new_url:
        s3.delete_by_url(old_url)
