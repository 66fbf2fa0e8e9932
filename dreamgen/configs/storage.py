"""
Image storage bucket configuration.

Settings for the bucket holding uploaded input images and generated outputs.

Dependencies: pydantic_settings
System role: Object storage configuration for generation images
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ImageStorageSettings(BaseSettings):
    """Settings for S3 image bucket operations."""

    model_config = SettingsConfigDict(
        env_prefix="S3_IMAGES_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="generation_images",
        description="S3 bucket for generation input/output images",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for S3 bucket",
    )
    public_base_url: str | None = Field(
        default=None,
        description="Public URL prefix for stored objects (defaults to the S3 virtual-hosted URL)",
    )
