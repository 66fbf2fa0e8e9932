"""
Generation API endpoint.

Routes: POST /generate

Errors are returned as {error, detail?} bodies rather than HTTPException
so the client can surface the upstream model's payload verbatim.

Dependencies: dreamgen.application.services, dreamgen.models
System role: Image generation HTTP API
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from dreamgen.api.deps.dependencies import get_current_user_id, get_generation_service
from dreamgen.application.services.generation_service import GenerationService
from dreamgen.core.exceptions import (
    GenerationValidationError,
    MalformedEncodingError,
    RemoteGenerationError,
)
from dreamgen.models.common import ErrorResponse
from dreamgen.models.generation import GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generate"])


def error_response(status_code: int, error: str, detail: Any = None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate(
    request: Request,
    user_id: str | None = Depends(get_current_user_id),
    generation_service: GenerationService = Depends(get_generation_service),
) -> JSONResponse:
    """
    Generate text and images from a prompt and optional reference images.

    Body: {prompt, images: [{mimeType, data}], aspectRatio}

    Returns:
        200 {parts: [...], debug: {candidates: bool}}
        400 {error} on invalid input
        500 {error, detail} on missing configuration or model failure
    """
    try:
        body = await request.json()
    except ValueError:
        return error_response(400, "Invalid JSON body")
    if not isinstance(body, dict):
        return error_response(400, "Invalid JSON body")

    try:
        payload = GenerateRequest.model_validate(body)
    except ValidationError as e:
        return error_response(400, "Invalid request body", e.errors(include_url=False))

    try:
        reply = await generation_service.generate(
            payload.prompt,
            payload.wire_images(),
            payload.aspect_ratio,
            user_id=user_id,
        )
    except (GenerationValidationError, MalformedEncodingError) as e:
        logger.warning(f"{__name__}:generate - Rejected request: {e}")
        return error_response(400, e.message)
    except RemoteGenerationError as e:
        return error_response(e.status_code or 500, e.error, e.detail)
    except Exception as e:
        logger.exception(f"{__name__}:generate - Unexpected server error: {e}")
        return error_response(500, "Unexpected server error", {"message": str(e)})

    return JSONResponse(content=reply)
