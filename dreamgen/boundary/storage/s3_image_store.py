"""
S3 image store for generation history.

Uploads input attachments and generated outputs as raw blobs under
{user_id}/{record_id}/{input|output}_{timestamp_ms} and returns the
public URL stored in the database.

Dependencies: boto3, botocore, logging
System role: Object storage adapter for generation images
"""

import asyncio
import logging
import time
from typing import TYPE_CHECKING
from uuid import UUID

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from dreamgen.boundary.db.models.generation_model import ImageType
from dreamgen.core.exceptions import PersistenceError

if TYPE_CHECKING:
    from dreamgen.configs.storage import ImageStorageSettings

logger = logging.getLogger(__name__)


def build_object_key(
    user_id: str,
    record_id: UUID | str,
    image_type: ImageType | str,
    timestamp_ms: int | None = None,
) -> str:
    """Object key: {user_id}/{record_id}/{input|output}_{timestamp_ms}."""
    kind = ImageType(image_type).value
    ts = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    return f"{user_id}/{record_id}/{kind}_{ts}"


class S3ImageStore:
    """Puts image blobs into the generation images bucket."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        public_base_url: str | None = None,
        s3_client=None,
    ) -> None:
        """
        Initialize the image store.

        Args:
            bucket: S3 bucket for generation images
            region: AWS region for the bucket
            public_base_url: URL prefix for stored objects; defaults to the
                virtual-hosted S3 URL
            s3_client: Optional preconfigured boto3 S3 client

        Raises:
            ValueError: If bucket is empty
        """
        if not bucket:
            raise ValueError("bucket is required")

        self._bucket = bucket
        self._region = region
        self._public_base_url = public_base_url.rstrip("/") if public_base_url else None
        self._s3_client = s3_client or boto3.client("s3", region_name=region)
        self._last_ts = 0

        logger.debug(f"{__name__}:__init__ - S3ImageStore initialized bucket={bucket}")

    @classmethod
    def from_settings(cls, settings: "ImageStorageSettings") -> "S3ImageStore":
        return cls(
            bucket=settings.bucket,
            region=settings.region,
            public_base_url=settings.public_base_url,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def public_url(self, key: str) -> str:
        if self._public_base_url:
            return f"{self._public_base_url}/{key}"
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"

    def _next_timestamp(self) -> int:
        # Keys within one record must not collide when uploads land in the same ms
        ts = max(int(time.time() * 1000), self._last_ts + 1)
        self._last_ts = ts
        return ts

    async def upload_image(
        self,
        user_id: str,
        record_id: UUID | str,
        image_type: ImageType | str,
        data: bytes,
        content_type: str = "image/png",
    ) -> str:
        """
        Upload one image blob and return its public URL.

        Args:
            user_id: Owner user id (first key segment)
            record_id: Generation record id
            image_type: input or output
            data: Raw image bytes
            content_type: Stored Content-Type

        Returns:
            Public URL of the stored object

        Raises:
            PersistenceError: If the upload fails
        """
        key = build_object_key(user_id, record_id, image_type, self._next_timestamp())
        logger.debug(
            f"{__name__}:upload_image - Uploading key={key}, size={len(data)} bytes"
        )

        try:
            await asyncio.to_thread(
                self._s3_client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                Metadata={
                    "user_id": str(user_id),
                    "generation_id": str(record_id),
                },
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:upload_image - {type(e).__name__}: {e}")
            raise PersistenceError(
                f"Failed to upload image: {e}",
                {"key": key, "bucket": self._bucket},
            ) from e

        url = self.public_url(key)
        logger.info(f"{__name__}:upload_image - Uploaded key={key}")
        return url
