"""
Local Filesystem Blob Store.

Keeps image attachments as files under a root directory. Blocking file
I/O runs on the shared thread pool so the event loop never stalls.

Resolved URLs point at ``public_base_url`` when one is configured (for a
static file server in front of the root), otherwise at ``file://`` URIs.
"""

import asyncio
from pathlib import Path
from urllib.parse import quote

from modules.backend.core.concurrency import get_io_pool
from modules.backend.core.exceptions import ResolutionError, StorageError
from modules.backend.core.logging import get_logger
from modules.backend.stores.base import BlobStore

logger = get_logger(__name__)


class LocalBlobStore(BlobStore):
    """Blob store writing one file per path under ``root``."""

    def __init__(self, root: str | Path, public_base_url: str | None = None) -> None:
        self.root = Path(root).resolve()
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None

    @property
    def backend_name(self) -> str:
        return "local"

    def _file_for(self, path: str) -> Path:
        """Map a storage path to a file, refusing paths outside the root."""
        candidate = (self.root / path.lstrip("/")).resolve()
        if candidate == self.root or not candidate.is_relative_to(self.root):
            raise StorageError(f"Invalid storage path: {path}")
        return candidate

    async def _run(self, fn, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(get_io_pool(), fn, *args)

    async def upload(self, path: str, payload: bytes, content_type: str | None = None) -> None:
        target = self._file_for(path)

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(payload)

        try:
            await self._run(_write)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        logger.debug("Blob written", extra={"path": path, "size": len(payload)})

    async def resolve_url(self, path: str) -> str:
        try:
            target = self._file_for(path)
        except StorageError as e:
            raise ResolutionError(e.message, path=path) from e

        if not await self._run(target.is_file):
            raise ResolutionError(f"No blob stored at {path}", path=path)

        if self.public_base_url:
            return f"{self.public_base_url}/{quote(path.lstrip('/'))}"
        return target.as_uri()

    async def remove(self, path: str) -> None:
        target = self._file_for(path)
        try:
            await self._run(target.unlink)
        except FileNotFoundError as e:
            raise StorageError(f"No blob stored at {path}") from e
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}") from e
        logger.debug("Blob removed", extra={"path": path})
