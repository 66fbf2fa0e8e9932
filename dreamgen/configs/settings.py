"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from dreamgen.configs.base import BaseSettings
from dreamgen.configs.database import DatabaseSettings
from dreamgen.configs.genai import GenAISettings
from dreamgen.configs.storage import ImageStorageSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = DatabaseSettings()
    genai: GenAISettings = GenAISettings()
    image_storage: ImageStorageSettings = ImageStorageSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from dreamgen.configs import get_settings
        settings = get_settings()
    """
    return Settings()
