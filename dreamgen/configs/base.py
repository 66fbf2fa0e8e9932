"""
Server-level settings for the Dream Image Generator API.

Shared .env handling plus the knobs the FastAPI app factory reads:
logging level, CORS origins, route prefix and the uvicorn bind address.
Every variable is read with the DREAMGEN_ prefix unless a subclass
overrides env_prefix.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Settings shared by the API process (DREAMGEN_*)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DREAMGEN_",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment name reported by the health route",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level passed to configure_logging()",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description='Allowed browser origins as JSON, e.g. ["https://dream.example"]',
    )
    api_prefix: str = Field(
        default="/api/v1",
        description="Prefix for every router",
    )
    host: str = Field(default="0.0.0.0", description="uvicorn bind host")
    port: int = Field(default=8000, description="uvicorn bind port")
