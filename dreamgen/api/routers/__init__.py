"""API routers."""

from .generate import router as generate_router
from .health import router as health_router
from .history import router as history_router
from .library import router as library_router
from .presets import router as presets_router

__all__ = [
    "generate_router",
    "health_router",
    "history_router",
    "library_router",
    "presets_router",
]
