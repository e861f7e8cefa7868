"""
Venue image storage.

Images live in an S3-compatible bucket (the "container"). The database keeps
only the object key; a read-only presigned URL is minted whenever a venue is
rendered.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import timedelta
from typing import BinaryIO, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from eventsystem.core.config import settings
from eventsystem.domain.image_policy import SIGNED_URL_TTL, ImagePolicy
from eventsystem.errors import MediaError, StorageUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoredImageRef:
    key: str
    content_type: str | None
    size: int


class MediaStore(Protocol):
    def put(self, data: bytes, key: str, content_type: str | None) -> str: ...

    def signed_url(self, key: str, ttl: timedelta | None = None) -> str: ...

    def delete(self, key: str) -> None: ...


class S3MediaStore:
    """MediaStore backed by an S3-compatible bucket through boto3."""

    def __init__(
        self,
        client,
        bucket: str,
        create_bucket: bool = False,
        url_ttl: timedelta = SIGNED_URL_TTL,
    ):
        self.client = client
        self.bucket = bucket
        self.create_bucket = create_bucket
        self.url_ttl = url_ttl
        self._bucket_ready = not create_bucket

    @classmethod
    def from_settings(cls) -> "S3MediaStore":
        client = boto3.client(
            "s3",
            endpoint_url=settings.media_endpoint_url,
            aws_access_key_id=settings.media_access_key_id,
            aws_secret_access_key=settings.media_secret_access_key,
            region_name=settings.media_region,
            config=Config(signature_version="s3v4"),
        )
        return cls(
            client,
            bucket=settings.media_bucket,
            create_bucket=settings.media_create_bucket,
            url_ttl=timedelta(seconds=settings.media_url_ttl_seconds),
        )

    def _ensure_bucket(self) -> None:
        if self._bucket_ready:
            return
        try:
            self.client.head_bucket(Bucket=self.bucket)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") not in ("404", "NoSuchBucket"):
                raise
            logger.info(f"Creating media bucket {self.bucket}")
            self.client.create_bucket(Bucket=self.bucket)
        self._bucket_ready = True

    def put(self, data: bytes, key: str, content_type: str | None) -> str:
        params = {"Bucket": self.bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type
        try:
            self._ensure_bucket()
            self.client.put_object(**params)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error uploading {key} to bucket {self.bucket}: {e}")
            raise StorageUnavailableError("Failed to upload image.") from e
        logger.info(f"Uploaded object: {key}")
        return key

    def signed_url(self, key: str, ttl: timedelta | None = None) -> str:
        if not key:
            raise ValueError("Object key cannot be empty")
        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=int((ttl or self.url_ttl).total_seconds()),
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to generate presigned URL for key {key}: {e}")
            raise StorageUnavailableError("Failed to sign image URL.") from e

    def delete(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to delete object {key}: {e}")
            raise StorageUnavailableError("Failed to delete image.") from e


def check_image(
    file_name: str, size: int, policy: ImagePolicy = ImagePolicy()
) -> str:
    """Run the image policy, logging the rejection before re-raising it."""
    try:
        return policy.check(file_name=file_name, size=size)
    except MediaError as e:
        logger.warning(f"Rejected upload {file_name!r} ({size} bytes): {e}")
        raise


def read_upload(
    stream: BinaryIO,
    file_name: str,
    declared_size: int | None = None,
    policy: ImagePolicy = ImagePolicy(),
) -> bytes:
    """
    Read an uploaded image without buffering more than the size limit.

    A declared size over the limit is refused before anything is read.
    Otherwise at most one byte past the limit is read, which is enough for
    the policy to reject an oversized payload.
    """
    if declared_size is not None and declared_size > policy.max_bytes:
        check_image(file_name, declared_size, policy)
    return stream.read(policy.max_bytes + 1)


def ingest_image(
    store: MediaStore,
    data: bytes,
    file_name: str,
    content_type: str | None = None,
    policy: ImagePolicy = ImagePolicy(),
) -> StoredImageRef:
    """
    Validate an uploaded image and store it under a generated unique name.

    Raises:
        InvalidSizeError: If the payload is empty or larger than 5 MiB
        InvalidTypeError: If the extension is not .jpg, .jpeg, .png or .gif
        StorageUnavailableError: If the store cannot be reached or the write fails
    """
    extension = check_image(file_name, len(data), policy)
    key = f"{uuid.uuid4()}{extension}"
    store.put(data, key, content_type)
    return StoredImageRef(key=key, content_type=content_type, size=len(data))


def discard_image(store: MediaStore, key: str) -> None:
    """Best-effort removal of an object that no row will reference."""
    try:
        store.delete(key)
    except StorageUnavailableError:
        logger.warning(f"Could not remove orphaned image {key}")
