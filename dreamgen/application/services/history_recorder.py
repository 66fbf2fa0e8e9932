"""
History recorder.

Persists a successful generation: the generation record is committed first,
then each input and output image is uploaded to object storage, then the
image rows are inserted in a second transaction. Individual failed uploads
are skipped; database failures surface as PersistenceError for the caller
to log, naming any uploaded objects left without rows.

Dependencies: sqlalchemy, dreamgen.boundary.db, dreamgen.boundary.storage
System role: Best-effort persistence of generation history
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from dreamgen.boundary.db.CRUD.generation_crud import (
    generation_crud,
    generation_image_crud,
)
from dreamgen.boundary.db.models.generation_model import ImageType
from dreamgen.boundary.storage.s3_image_store import S3ImageStore
from dreamgen.core.exceptions import (
    DreamGenException,
    MalformedEncodingError,
    PersistenceError,
)
from dreamgen.core.generation.codec import DEFAULT_IMAGE_MIME, decode, resource_to_bytes
from dreamgen.core.generation.pipeline import GenerationHandoff, Recorder

logger = logging.getLogger(__name__)

ImageBlob = tuple[str, bytes]


def decode_wire_images(images: list[dict]) -> list[ImageBlob]:
    """
    Decode wire images ({mimeType, data}) into (mime, bytes) pairs.

    Entries with empty or undecodable data are skipped.
    """
    blobs: list[ImageBlob] = []
    for idx, img in enumerate(images):
        data = (img or {}).get("data")
        if not data:
            continue
        try:
            blobs.append((img.get("mimeType") or DEFAULT_IMAGE_MIME, decode(data)))
        except MalformedEncodingError as e:
            logger.warning(
                f"{__name__}:decode_wire_images - Skipping image at index {idx}: {e}"
            )
    return blobs


class HistoryRecorder:
    """Writes generation records and their images."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        image_store: S3ImageStore,
    ) -> None:
        """
        Initialize recorder.

        Args:
            session_factory: Factory for the recorder's own sessions
            image_store: Object storage for image blobs
        """
        self._session_factory = session_factory
        self._image_store = image_store

    async def _upload_all(
        self,
        user_id: str,
        record_id: UUID,
        image_type: ImageType,
        blobs: list[ImageBlob],
    ) -> list[dict]:
        rows: list[dict] = []
        for mime_type, data in blobs:
            try:
                url = await self._image_store.upload_image(
                    user_id, record_id, image_type, data, content_type=mime_type
                )
            except DreamGenException as e:
                logger.error(
                    f"{__name__}:_upload_all - Error uploading {image_type.value} image: {e}"
                )
                continue
            rows.append(
                {"generation_id": record_id, "image_url": url, "image_type": image_type}
            )
        return rows

    async def record(
        self,
        user_id: str,
        prompt_text: str,
        inputs: list[ImageBlob],
        outputs: list[ImageBlob],
    ) -> UUID:
        """
        Persist one generation.

        Args:
            user_id: Owner user id
            prompt_text: Prompt as submitted
            inputs: Input images as (mime, bytes), in order
            outputs: Output images as (mime, bytes), in order

        Returns:
            UUID: Created generation record id

        Raises:
            PersistenceError: If the record or image rows cannot be written
        """
        logger.info(
            f"{__name__}:record - START user_id={user_id}, "
            f"inputs={len(inputs)}, outputs={len(outputs)}"
        )
        async with self._session_factory() as session:
            # No transaction stays open across uploads
            try:
                record = await generation_crud.create_record(session, user_id, prompt_text)
                record_id = record.id
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"{__name__}:record - Failed to save generation: {e}")
                raise PersistenceError(
                    f"Failed to save generation: {e}", {"user_id": user_id}
                ) from e

            rows = await self._upload_all(user_id, record_id, ImageType.INPUT, inputs)
            rows += await self._upload_all(user_id, record_id, ImageType.OUTPUT, outputs)
            if rows:
                try:
                    await generation_image_crud.attach_many(session, rows)
                    await session.commit()
                except SQLAlchemyError as e:
                    await session.rollback()
                    orphaned = [row["image_url"] for row in rows]
                    logger.error(
                        f"{__name__}:record - Failed to save image rows for "
                        f"generation_id={record_id}; uploaded objects left without rows: {orphaned}"
                    )
                    raise PersistenceError(
                        f"Failed to save generation images: {e}",
                        {"user_id": user_id, "generation_id": str(record_id), "orphaned_urls": orphaned},
                    ) from e

        logger.info(
            f"{__name__}:record - END generation_id={record_id}, images={len(rows)}"
        )
        return record_id

    async def record_wire(
        self,
        user_id: str,
        prompt_text: str,
        input_images: list[dict],
        output_parts: list[dict],
    ) -> UUID:
        """Persist a generation from wire-format inputs and reply parts."""
        outputs = [p for p in output_parts if p.get("type") == "image"]
        return await self.record(
            user_id,
            prompt_text,
            decode_wire_images(input_images),
            decode_wire_images(outputs),
        )

    def for_user(self, user_id: str) -> Recorder:
        """Adapt this recorder to the pipeline's hand-off callback."""

        async def _record(handoff: GenerationHandoff) -> None:
            inputs = [(a.media_type, await a.read()) for a in handoff.attachments]
            outputs = [resource_to_bytes(r) for r in handoff.result.images]
            await self.record(user_id, handoff.prompt, inputs, outputs)

        return _record
