"""
HTTP transport for the generation endpoint.

Posts an OutboundRequest to the server's /generate route and returns the
decoded JSON reply. Non-2xx replies surface their error and detail verbatim.

Dependencies: httpx, logging
System role: Outbound generation call for pipeline clients
"""

import logging
from typing import Any

import httpx

from dreamgen.core.exceptions import RemoteGenerationError
from dreamgen.core.generation.pipeline import OutboundRequest

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/v1/generate"


class HttpGenerationTransport:
    """GenerationTransport backed by httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str,
        user_id: str | None = None,
        timeout: float = 300.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._user_id = user_id

    async def send(self, request: OutboundRequest) -> Any:
        """
        POST the request and return the JSON reply.

        Raises:
            RemoteGenerationError: Network failure, non-2xx status or unreadable reply
        """
        headers = {"X-User-Id": self._user_id} if self._user_id else {}
        try:
            response = await self._client.post(
                GENERATE_PATH,
                json=request.to_payload(),
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.error(f"{__name__}:send - Transport error: {type(e).__name__}: {e}")
            raise RemoteGenerationError(f"Network error: {e}") from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            message = body.get("error") or body.get("message") or "Server error"
            logger.error(
                f"{__name__}:send - Generation failed status={response.status_code}: {message}"
            )
            raise RemoteGenerationError(
                message,
                detail=body.get("detail"),
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise RemoteGenerationError("Malformed reply from generation server") from e

    async def aclose(self) -> None:
        await self._client.aclose()
