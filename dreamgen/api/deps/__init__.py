"""Dependency injection for FastAPI routes."""

from .dependencies import (
    ServiceCache,
    get_current_user_id,
    get_generation_service,
    get_history_service,
    get_library_service,
    get_service_cache,
    require_user_id,
)

__all__ = [
    "ServiceCache",
    "get_current_user_id",
    "get_generation_service",
    "get_history_service",
    "get_library_service",
    "get_service_cache",
    "require_user_id",
]
