"""
HTTP Blob Store.

Talks to an object storage endpoint that exposes blobs as plain HTTP
resources: ``PUT`` to store, ``HEAD`` to check, ``DELETE`` to remove, all
at ``<base_url>/<path>``. An optional bearer token from config/.env is
sent with every request.
"""

from typing import Any
from urllib.parse import quote

import httpx

from modules.backend.core.exceptions import ResolutionError, StorageError
from modules.backend.core.logging import get_logger
from modules.backend.stores.base import BlobStore

logger = get_logger(__name__)


class HttpBlobStore(BlobStore):
    """
    Blob store over HTTP.

    Usage:
        store = HttpBlobStore("https://objects.example.com/notes", token="...")
        await store.upload("images/abc-cat.png", data, "image/png")
        url = await store.resolve_url("images/abc-cat.png")
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token = token or None
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def backend_name(self) -> str:
        return "http"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def object_url(self, path: str) -> str:
        return f"{self.base_url}/{quote(path.lstrip('/'))}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = await self._get_client()
        url = self.object_url(path)
        logger.debug("Blob request", extra={"method": method, "path": path})
        try:
            return await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(
                "Blob request failed",
                extra={"method": method, "path": path, "error": str(e)},
            )
            raise StorageError(f"{method} {path} failed: {e}") from e

    async def upload(self, path: str, payload: bytes, content_type: str | None = None) -> None:
        headers = {"Content-Type": content_type} if content_type else {}
        response = await self._request("PUT", path, content=payload, headers=headers)
        if response.is_error:
            raise StorageError(f"Upload of {path} rejected with HTTP {response.status_code}")

    async def resolve_url(self, path: str) -> str:
        try:
            response = await self._request("HEAD", path)
        except StorageError as e:
            raise ResolutionError(e.message, path=path) from e
        if response.is_error:
            raise ResolutionError(
                f"Blob {path} unavailable (HTTP {response.status_code})",
                path=path,
            )
        return self.object_url(path)

    async def remove(self, path: str) -> None:
        response = await self._request("DELETE", path)
        if response.is_error:
            raise StorageError(f"Removal of {path} rejected with HTTP {response.status_code}")
