"""
Test suite for S3ImageStore.

Uses a mocked boto3 client; no AWS calls.

System role: Verification of the object storage adapter
"""

import uuid
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from dreamgen.boundary.db.models.generation_model import ImageType
from dreamgen.boundary.storage.s3_image_store import S3ImageStore, build_object_key
from dreamgen.core.exceptions import PersistenceError


@pytest.fixture
def s3_client() -> MagicMock:
    return MagicMock()


class TestObjectKeys:
    """Test suite for build_object_key()."""

    def test_key_layout(self) -> None:
        record_id = uuid.UUID("12345678-1234-5678-1234-567812345678")

        assert (
            build_object_key("user-1", record_id, ImageType.OUTPUT, 1700000000123)
            == "user-1/12345678-1234-5678-1234-567812345678/output_1700000000123"
        )

    def test_key_accepts_plain_string_type(self) -> None:
        assert build_object_key("u", "r", "input", 1) == "u/r/input_1"


class TestUploadImage:
    """Test suite for S3ImageStore.upload_image()."""

    def test_empty_bucket_should_raise(self, s3_client) -> None:
        with pytest.raises(ValueError):
            S3ImageStore(bucket="", s3_client=s3_client)

    async def test_upload_should_put_object_and_return_public_url(self, s3_client) -> None:
        # Arrange
        store = S3ImageStore(bucket="generation_images", region="eu-west-1", s3_client=s3_client)
        record_id = uuid.uuid4()

        # Act
        url = await store.upload_image("user-1", record_id, ImageType.INPUT, b"\x89PNG", "image/png")

        # Assert
        kwargs = s3_client.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "generation_images"
        assert kwargs["Body"] == b"\x89PNG"
        assert kwargs["ContentType"] == "image/png"
        assert kwargs["Key"].startswith(f"user-1/{record_id}/input_")
        assert url == f"https://generation_images.s3.eu-west-1.amazonaws.com/{kwargs['Key']}"

    async def test_public_base_url_should_prefix_key(self, s3_client) -> None:
        store = S3ImageStore(
            bucket="b", public_base_url="https://cdn.example.com/images/", s3_client=s3_client
        )

        url = await store.upload_image("u", "r", ImageType.OUTPUT, b"x")

        assert url.startswith("https://cdn.example.com/images/u/r/output_")

    async def test_keys_within_one_record_should_not_collide(self, s3_client) -> None:
        store = S3ImageStore(bucket="b", s3_client=s3_client)

        for _ in range(5):
            await store.upload_image("u", "r", ImageType.OUTPUT, b"x")

        keys = [c.kwargs["Key"] for c in s3_client.put_object.call_args_list]
        assert len(set(keys)) == 5

    async def test_client_error_should_raise_persistence_error(self, s3_client) -> None:
        s3_client.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
        )
        store = S3ImageStore(bucket="b", s3_client=s3_client)

        with pytest.raises(PersistenceError):
            await store.upload_image("u", "r", ImageType.INPUT, b"x")
