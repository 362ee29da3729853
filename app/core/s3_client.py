import logging
import random
import time
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from app.core.config import settings
from app.core.errors import StorageError

log = logging.getLogger(__name__)

MIME_TO_EXTENSION = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}
DEFAULT_EXTENSION = "jpg"


def extension_for(content_type: Optional[str]) -> str:
    return MIME_TO_EXTENSION.get(content_type or "", DEFAULT_EXTENSION)


def build_object_key(
    folder: str, slug: str, content_type: Optional[str], *, tag: str = "", unique: bool = False
) -> str:
    """
    Object key in the `{folder}/{slug}-{timestamp}.{ext}` layout.

    :param tag: Extra marker placed before the timestamp (e.g. "thumb").
    :param unique: Appends a random suffix so uploads in the same millisecond differ.
    """
    parts = [slug]
    if tag:
        parts.append(tag)
    parts.append(str(int(time.time() * 1000)))
    if unique:
        parts.append(str(random.randint(0, 10**9)))
    return f"{folder}/{'-'.join(parts)}.{extension_for(content_type)}"


class S3Client:
    def __init__(self, client=None):
        self.client = client or boto3.client(
            "s3",
            region_name="auto",
            endpoint_url=settings.R2_ENDPOINT,
            aws_access_key_id=settings.R2_ACCESS_KEY_ID,
            aws_secret_access_key=settings.R2_SECRET_ACCESS_KEY,
        )
        self.bucket_name = settings.R2_BUCKET_NAME
        self.public_domain = settings.R2_PUBLIC_DOMAIN

    def public_url(self, key: str) -> str:
        return f"{self.public_domain}/{key}"

    def key_from_url(self, url: str) -> Optional[str]:
        """Returns the object key for URLs served from our public domain, else None."""
        prefix = f"{self.public_domain}/"
        if not url or not url.startswith(prefix):
            return None
        return url[len(prefix):]

    def upload_bytes(self, body: bytes, key: str, content_type: Optional[str]) -> str:
        """
        Uploads a buffer to the bucket and returns its public URL.

        :param body: The file contents.
        :param key: The object key within the bucket.
        :param content_type: MIME type stored with the object.
        :return: The URL of the uploaded file.
        """
        log.info("Uploading %s to object storage", key)
        try:
            self.client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=body,
                ContentType=content_type or "application/octet-stream",
            )
        except NoCredentialsError as e:
            raise StorageError("Object storage credentials not available") from e
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Error uploading to object storage: {e}") from e

        url = self.public_url(key)
        log.info("Upload successful. Public URL: %s", url)
        return url

    def delete_by_url(self, url: Optional[str]) -> None:
        """Best-effort delete of an object we host; failures are only logged."""
        key = self.key_from_url(url) if url else None
        if key is None:
            return
        try:
            log.info("Deleting old image from object storage: %s", key)
            self.client.delete_object(Bucket=self.bucket_name, Key=key)
        except (BotoCoreError, ClientError) as e:
            log.warning("Error deleting object %s from object storage: %s", key, e)


s3_client = S3Client()


def get_s3_client() -> S3Client:
    return s3_client
