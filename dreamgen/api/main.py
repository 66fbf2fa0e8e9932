"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, dreamgen.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dreamgen.api.deps.dependencies import get_service_cache
from dreamgen.configs import get_settings
from dreamgen.observability.logger import configure_logging
from dreamgen.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    generate_router,
    health_router,
    history_router,
    library_router,
    presets_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.gemini_client
    _ = cache.image_store
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Dream Image Generator API",
        description="Prompt-to-image generation with presets, history and a shared prompt library",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Versioned prefix, /api/v1 by default
    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(presets_router, prefix=settings.api_prefix)
    app.include_router(generate_router, prefix=settings.api_prefix)
    app.include_router(history_router, prefix=settings.api_prefix)
    app.include_router(library_router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "dreamgen.api.main:app",
        host=settings.host,
        port=settings.port,
    )
