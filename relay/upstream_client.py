"""HTTP client that forwards relay requests to the upstream storage server."""

from typing import Optional

import httpx

from common.constants import UPSTREAM_COMBINE_CHUNKS_PATH, UPSTREAM_UPLOAD_CHUNK_PATH
from common.logging_config import get_logger
from relay.config import RELAY_UPSTREAM_TIMEOUT, RELAY_UPSTREAM_URL
from relay.exceptions import UpstreamError

logger = get_logger(__name__)


class UpstreamClient:
    """
    Async client for the storage server behind the relay.
    Handles connection management and forwarding.
    """

    def __init__(
        self,
        base_url: str = RELAY_UPSTREAM_URL,
        timeout: float = RELAY_UPSTREAM_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize client with lazy connection."""
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure the HTTP client is created."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport
            )
            logger.debug(f"Opened upstream client to {self._base_url}")
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _post(self, path: str, payload: dict) -> dict:
        client = self._ensure_client()
        try:
            response = await client.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Upstream request failed: POST {path} error={type(e).__name__}: {e}")
            raise UpstreamError(f"Upstream storage server unreachable: {e}") from e

        if not response.is_success:
            logger.error(f"Upstream rejected request: POST {path} status={response.status_code}")
            raise UpstreamError("Upstream storage server error")

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError("Upstream storage server returned an invalid response") from e

    async def upload_chunk(self, payload: dict) -> dict:
        """
        Forward a chunk to the storage server.

        Args:
            payload: Chunk request body, unchanged from the client

        Returns:
            Decoded upstream response

        Raises:
            UpstreamError: If the storage server fails or is unreachable
        """
        return await self._post(UPSTREAM_UPLOAD_CHUNK_PATH, payload)

    async def combine_chunks(self, payload: dict) -> dict:
        """
        Ask the storage server to combine all chunks of an upload.

        Args:
            payload: Completion request body

        Returns:
            Decoded upstream response

        Raises:
            UpstreamError: If the storage server fails or is unreachable
        """
        return await self._post(UPSTREAM_COMBINE_CHUNKS_PATH, payload)


async def get_upstream_client():
    """Dependency yielding an upstream client for one request."""
    client = UpstreamClient()
    try:
        yield client
    finally:
        await client.close()
