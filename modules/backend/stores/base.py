"""
Remote Store Interfaces.

Defines the contracts the note service consumes. The note store persists
note records; the blob store holds image attachments keyed by path. The
service interacts with storage exclusively through these interfaces.

Implementations raise RemoteError (note store) or StorageError /
ResolutionError (blob store) for every failure they can classify.
"""

from abc import ABC, abstractmethod

from modules.backend.schemas.note import NoteInput, NotePatch, NoteRecord


class NoteStore(ABC):
    """Base class for all note stores."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Backend identifier (e.g., 'sql', 'memory')."""
        ...

    @abstractmethod
    async def list_all(self) -> list[NoteRecord]:
        """Return every note record."""
        ...

    @abstractmethod
    async def create(self, data: NoteInput) -> NoteRecord:
        """Persist a new record. The store assigns id and timestamps."""
        ...

    @abstractmethod
    async def update(self, note_id: str, patch: NotePatch) -> NoteRecord:
        """Apply a patch and return the updated record."""
        ...

    @abstractmethod
    async def delete(self, note_id: str) -> None:
        """Delete a record."""
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
        return None


class BlobStore(ABC):
    """Base class for all blob stores."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Backend identifier (e.g., 'local', 'http', 'memory')."""
        ...

    @abstractmethod
    async def upload(self, path: str, payload: bytes, content_type: str | None = None) -> None:
        """Store ``payload`` under ``path``, replacing any existing blob."""
        ...

    @abstractmethod
    async def resolve_url(self, path: str) -> str:
        """
        Return a URL the presentation layer can fetch the blob from.

        Raises:
            ResolutionError: If the blob is missing or no URL can be produced
        """
        ...

    @abstractmethod
    async def remove(self, path: str) -> None:
        """Delete the blob stored under ``path``."""
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
        return None
