"""
Generative model configuration settings.

Settings for the hosted image model: API key, model id and request timeout.

Dependencies: pydantic_settings
System role: Remote model boundary configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenAISettings(BaseSettings):
    """Settings for Google GenAI image generation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GENAI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="Google GenAI API key (GENAI_API_KEY)",
    )
    model: str = Field(
        default="gemini-2.5-flash-image-preview",
        description="Image-capable Gemini model id",
    )
    timeout_ms: int = Field(
        default=300_000,
        description="HTTP timeout for generate_content calls in milliseconds",
    )
