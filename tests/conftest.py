"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database sessions, fake generation transports, image payload builders
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import asyncio
import uuid
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest

from dreamgen.core.generation.attachments import RawFile
from dreamgen.core.generation.codec import encode

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def make_png(size: int) -> bytes:
    """PNG-signed payload of exactly size bytes."""
    if size <= len(PNG_SIGNATURE):
        return PNG_SIGNATURE[:size]
    return PNG_SIGNATURE + b"\x00" * (size - len(PNG_SIGNATURE))


class FakeTransport:
    """
    GenerationTransport double.

    Records every request and returns a fixed reply, optionally after
    waiting on a gate so tests can hold a submission in flight.
    """

    def __init__(self, reply: Any = None, error: Exception | None = None) -> None:
        self.reply = reply if reply is not None else {"parts": []}
        self.error = error
        self.requests: list = []
        self.gate: asyncio.Event | None = None

    async def send(self, request):
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def png_file() -> Callable[..., RawFile]:
    """Factory for PNG RawFiles of a given size."""

    def _make(size: int = 1024, name: str = "ref.png", content_type: str = "image/png") -> RawFile:
        return RawFile(filename=name, content_type=content_type, data=make_png(size))

    return _make


@pytest.fixture
def image_reply() -> Callable[..., dict]:
    """Factory for a direct-parts reply carrying text and PNG images."""

    def _make(text: str = "Here you go", images: int = 1) -> dict:
        parts: list[dict] = [{"type": "text", "text": text}] if text else []
        for i in range(images):
            parts.append({"type": "image", "mimeType": "image/png", "data": encode(make_png(64 + i))})
        return {"parts": parts, "debug": {"candidates": True}}

    return _make


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def mock_image_store() -> AsyncMock:
    """S3ImageStore double returning predictable URLs."""
    store = AsyncMock()
    counter = {"n": 0}

    async def _upload(user_id, record_id, image_type, data, content_type="image/png"):
        counter["n"] += 1
        kind = getattr(image_type, "value", image_type)
        return f"https://images.test/{user_id}/{record_id}/{kind}_{counter['n']}"

    store.upload_image = AsyncMock(side_effect=_upload)
    return store


@pytest.fixture
async def test_session_factory():
    """
    In-memory SQLite session factory with all tables created.

    Yields:
        async_sessionmaker: Factory bound to a shared in-memory engine
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from dreamgen.boundary.db import models  # noqa: F401
    from dreamgen.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create in-memory SQLite async database session for testing.

    Yields:
        AsyncSession: Test database session, rolled back afterwards
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def user_id() -> str:
    return f"user-{uuid.uuid4().hex[:8]}"


@pytest.fixture
def png_bytes() -> Callable[[int], bytes]:
    return make_png


@pytest.fixture
def transport_factory() -> type[FakeTransport]:
    return FakeTransport
