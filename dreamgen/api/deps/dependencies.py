"""
Dependency injection container.

Factory functions for FastAPI dependencies. Caller identity comes from the
X-User-Id header set by the auth gateway in front of the API.

Dependencies: dreamgen.configs, dreamgen.application, dreamgen.boundary
System role: DI container for service injection
"""

import logging

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from dreamgen.application.services import (
    GenerationService,
    HistoryRecorder,
    HistoryService,
    LibraryService,
)
from dreamgen.boundary.db import get_async_db, get_async_session_factory
from dreamgen.configs import get_settings

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached boundary clients."""

    def __init__(self):
        self._gemini_client = None
        self._gemini_loaded = False
        self._image_store = None
        self._history_recorder = None

    @property
    def gemini_client(self):
        """Get cached Gemini client, None when no API key is configured."""
        if not self._gemini_loaded:
            from dreamgen.boundary.genai.gemini_client import GeminiImageClient

            genai_settings = get_settings().genai
            if genai_settings.api_key:
                self._gemini_client = GeminiImageClient(
                    api_key=genai_settings.api_key,
                    model=genai_settings.model,
                    timeout_ms=genai_settings.timeout_ms,
                )
            else:
                logger.warning(
                    f"{__name__}:gemini_client - GENAI_API_KEY not set; generation disabled"
                )
            self._gemini_loaded = True
        return self._gemini_client

    @property
    def image_store(self):
        """Get cached S3 image store."""
        if self._image_store is None:
            from dreamgen.boundary.storage.s3_image_store import S3ImageStore

            self._image_store = S3ImageStore.from_settings(get_settings().image_storage)
        return self._image_store

    @property
    def history_recorder(self) -> HistoryRecorder:
        """Get cached history recorder."""
        if self._history_recorder is None:
            self._history_recorder = HistoryRecorder(
                session_factory=get_async_session_factory(),
                image_store=self.image_store,
            )
        return self._history_recorder

    def clear(self) -> None:
        """Clear all cached instances."""
        self._gemini_client = None
        self._gemini_loaded = False
        self._image_store = None
        self._history_recorder = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str | None:
    """Caller id from the X-User-Id header, None for anonymous calls."""
    if x_user_id is None:
        return None
    return x_user_id.strip() or None


def require_user_id(user_id: str | None = Depends(get_current_user_id)) -> str:
    """
    Caller id for routes that need a signed-in user.

    Raises:
        HTTPException(401): If the X-User-Id header is missing
    """
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not authenticated",
        )
    return user_id


def get_generation_service(
    cache: ServiceCache = Depends(get_service_cache),
) -> GenerationService:
    """
    Get generation service instance.

    Returns:
        GenerationService: Service over the cached Gemini client and recorder
    """
    return GenerationService(
        client=cache.gemini_client,
        recorder=cache.history_recorder,
    )


def get_history_service(db: AsyncSession = Depends(get_async_db)) -> HistoryService:
    """
    Get history service instance.

    Args:
        db: Async database session (injected via Depends)
    """
    return HistoryService(db=db)


def get_library_service(db: AsyncSession = Depends(get_async_db)) -> LibraryService:
    """
    Get library service instance.

    Args:
        db: Async database session (injected via Depends)
    """
    return LibraryService(db=db)
