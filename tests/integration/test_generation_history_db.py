"""
Integration tests for generation persistence.

Runs GenerationCRUD, HistoryRecorder and HistoryService against in-memory
SQLite with a mocked image store.

System role: Verification of generation history storage
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from dreamgen.application.services.history_recorder import HistoryRecorder
from dreamgen.application.services.history_service import HistoryService, make_library_title
from dreamgen.boundary.db.CRUD.generation_crud import generation_crud, generation_image_crud
from dreamgen.boundary.db.models.generation_model import ImageType
from dreamgen.core.exceptions import (
    GenerationNotFoundError,
    PermissionDeniedError,
    PersistenceError,
)
from dreamgen.core.generation.attachments import Attachment
from dreamgen.core.generation.codec import encode, to_resource
from dreamgen.core.generation.pipeline import GenerationHandoff, GenerationResult


@pytest.fixture
def recorder(test_session_factory, mock_image_store) -> HistoryRecorder:
    return HistoryRecorder(session_factory=test_session_factory, image_store=mock_image_store)


class TestGenerationCRUD:
    """Test suite for GenerationCRUD queries."""

    async def test_list_for_user_should_return_newest_first(self, test_async_db, user_id) -> None:
        # Arrange
        base = datetime(2025, 1, 1, tzinfo=timezone.utc)
        for i in range(3):
            await generation_crud.create(
                test_async_db,
                user_id=user_id,
                prompt_text=f"prompt {i}",
                created_at=base + timedelta(minutes=i),
            )
        await generation_crud.create_record(test_async_db, "someone-else", "not mine")

        # Act
        records = await generation_crud.list_for_user(test_async_db, user_id)

        # Assert
        assert [r.prompt_text for r in records] == ["prompt 2", "prompt 1", "prompt 0"]

    async def test_list_for_user_should_honor_limit(self, test_async_db, user_id) -> None:
        for i in range(4):
            await generation_crud.create_record(test_async_db, user_id, f"p{i}")

        records = await generation_crud.list_for_user(test_async_db, user_id, limit=2)

        assert len(records) == 2

    async def test_attach_many_and_get_by_generation_id(self, test_async_db, user_id) -> None:
        record = await generation_crud.create_record(test_async_db, user_id, "p")
        await generation_image_crud.attach_many(
            test_async_db,
            [
                {"generation_id": record.id, "image_url": "https://x/in", "image_type": "input"},
                {"generation_id": record.id, "image_url": "https://x/out", "image_type": ImageType.OUTPUT},
            ],
        )

        images = await generation_image_crud.get_by_generation_id(test_async_db, record.id)

        assert {(i.image_url, i.image_type) for i in images} == {
            ("https://x/in", ImageType.INPUT),
            ("https://x/out", ImageType.OUTPUT),
        }


class TestHistoryRecorder:
    """Test suite for HistoryRecorder against SQLite."""

    async def test_record_should_store_inputs_then_outputs(
        self, recorder, test_session_factory, mock_image_store, user_id
    ) -> None:
        # Act
        generation_id = await recorder.record(
            user_id,
            "a red fox",
            inputs=[("image/png", b"in-1")],
            outputs=[("image/png", b"out-1"), ("image/jpeg", b"out-2")],
        )

        # Assert
        async with test_session_factory() as session:
            stored = await generation_crud.get_with_images(session, generation_id)
        assert stored.user_id == user_id
        assert stored.prompt_text == "a red fox"
        assert sorted(i.image_type.value for i in stored.images) == ["input", "output", "output"]
        uploaded_types = [c.args[2] for c in mock_image_store.upload_image.await_args_list]
        assert uploaded_types == [ImageType.INPUT, ImageType.OUTPUT, ImageType.OUTPUT]
        first_call = mock_image_store.upload_image.await_args_list[0]
        assert first_call.args[:3] == (user_id, generation_id, ImageType.INPUT)
        assert first_call.args[3] == b"in-1"

    async def test_failed_upload_should_be_skipped(
        self, recorder, test_session_factory, mock_image_store, user_id
    ) -> None:
        # Arrange
        original = mock_image_store.upload_image.side_effect
        calls = {"n": 0}

        async def flaky(*args, **kwargs):
            calls["n"] += 1
            if calls["n"] == 1:
                raise PersistenceError("bucket unavailable")
            return await original(*args, **kwargs)

        mock_image_store.upload_image.side_effect = flaky

        # Act
        generation_id = await recorder.record(
            user_id, "p", inputs=[("image/png", b"a")], outputs=[("image/png", b"b")]
        )

        # Assert
        async with test_session_factory() as session:
            images = await generation_image_crud.get_by_generation_id(session, generation_id)
        assert [i.image_type for i in images] == [ImageType.OUTPUT]

    async def test_generation_row_should_be_committed_before_uploads(
        self, recorder, test_session_factory, mock_image_store, user_id
    ) -> None:
        # Arrange
        original = mock_image_store.upload_image.side_effect
        seen_committed = []

        async def checking_upload(u, record_id, *args, **kwargs):
            async with test_session_factory() as session:
                seen_committed.append(await generation_crud.get_by_id(session, record_id) is not None)
            return await original(u, record_id, *args, **kwargs)

        mock_image_store.upload_image.side_effect = checking_upload

        # Act
        await recorder.record(user_id, "p", inputs=[("image/png", b"a")], outputs=[("image/png", b"b")])

        # Assert
        assert seen_committed == [True, True]

    async def test_image_row_failure_should_report_orphaned_uploads(
        self, recorder, test_session_factory, mock_image_store, user_id, monkeypatch
    ) -> None:
        # Arrange
        monkeypatch.setattr(
            generation_image_crud,
            "attach_many",
            AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("disk full"))),
        )

        # Act
        with pytest.raises(PersistenceError) as exc_info:
            await recorder.record(user_id, "p", inputs=[], outputs=[("image/png", b"b")])

        # Assert
        details = exc_info.value.details
        assert len(details["orphaned_urls"]) == 1
        assert details["orphaned_urls"][0].startswith(f"https://images.test/{user_id}/")
        async with test_session_factory() as session:
            stored = await generation_crud.get_with_images(session, uuid.UUID(details["generation_id"]))
        assert stored is not None
        assert stored.images == []

    async def test_record_wire_should_decode_and_skip_bad_payloads(
        self, recorder, mock_image_store, user_id
    ) -> None:
        await recorder.record_wire(
            user_id,
            "p",
            input_images=[{"mimeType": "image/png", "data": encode(b"ref")}, {"data": "not base64!"}],
            output_parts=[
                {"type": "text", "text": "hello"},
                {"type": "image", "mimeType": "image/webp", "data": encode(b"gen")},
            ],
        )

        uploaded = [(c.args[2], c.args[3], c.kwargs["content_type"]) for c in mock_image_store.upload_image.await_args_list]
        assert uploaded == [
            (ImageType.INPUT, b"ref", "image/png"),
            (ImageType.OUTPUT, b"gen", "image/webp"),
        ]

    async def test_for_user_should_adapt_pipeline_handoff(
        self, recorder, test_session_factory, user_id
    ) -> None:
        handoff = GenerationHandoff(
            prompt="a boat",
            attachments=[Attachment("a.png", "image/png", b"ref", "preview:a")],
            result=GenerationResult(texts="", images=[to_resource("image/png", encode(b"gen"))]),
        )

        await recorder.for_user(user_id)(handoff)

        async with test_session_factory() as session:
            records = await generation_crud.list_for_user(session, user_id)
        assert len(records) == 1
        assert records[0].prompt_text == "a boat"
        assert len(records[0].images) == 2


class TestHistoryService:
    """Test suite for HistoryService against SQLite."""

    def test_make_library_title(self) -> None:
        assert make_library_title("short") == "short"
        assert make_library_title("x" * 65) == "x" * 64 + "..."
        assert make_library_title("x" * 64) == "x" * 64

    async def test_list_history_should_group_images(
        self, recorder, test_async_db, user_id
    ) -> None:
        await recorder.record(user_id, "p", [("image/png", b"i")], [("image/png", b"o")])

        items = await HistoryService(test_async_db).list_history(user_id)

        assert len(items) == 1
        assert items[0]["prompt_text"] == "p"
        assert len(items[0]["input_images"]) == 1
        assert len(items[0]["output_images"]) == 1
        assert "/input_" in items[0]["input_images"][0]

    async def test_add_to_library_should_create_public_entry(
        self, recorder, test_async_db, user_id
    ) -> None:
        prompt = "a very long prompt " * 10
        generation_id = await recorder.record(user_id, prompt, [], [])

        entry = await HistoryService(test_async_db).add_to_library(user_id, generation_id)

        assert entry["title"] == prompt[:64] + "..."
        assert entry["prompt"] == prompt
        assert entry["is_public"] is True
        assert entry["source_generation_id"] == generation_id
        assert entry["like_count"] == 0

    async def test_add_to_library_unknown_generation(self, test_async_db, user_id) -> None:
        with pytest.raises(GenerationNotFoundError):
            await HistoryService(test_async_db).add_to_library(user_id, uuid.uuid4())

    async def test_add_to_library_other_users_generation(
        self, recorder, test_async_db, user_id
    ) -> None:
        generation_id = await recorder.record("owner", "p", [], [])

        with pytest.raises(PermissionDeniedError):
            await HistoryService(test_async_db).add_to_library(user_id, generation_id)
