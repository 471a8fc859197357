"""
In-Memory Stores.

Dict-backed note and blob stores for tests and dry runs. Nothing
survives the process.
"""

from urllib.parse import quote
from uuid import uuid4

from modules.backend.core.exceptions import RemoteError, ResolutionError, StorageError
from modules.backend.core.utils import utc_now
from modules.backend.schemas.note import NoteInput, NotePatch, NoteRecord
from modules.backend.stores.base import BlobStore, NoteStore


class InMemoryNoteStore(NoteStore):
    """Note store keeping records in a dict. Lists newest first, like the SQL store."""

    def __init__(self) -> None:
        self._records: dict[str, NoteRecord] = {}

    @property
    def backend_name(self) -> str:
        return "memory"

    async def list_all(self) -> list[NoteRecord]:
        return list(reversed(self._records.values()))

    async def create(self, data: NoteInput) -> NoteRecord:
        now = utc_now()
        record = NoteRecord(
            id=str(uuid4()),
            name=data.name,
            description=data.description,
            image=data.image,
            created_at=now,
            updated_at=now,
        )
        self._records[record.id] = record
        return record

    async def update(self, note_id: str, patch: NotePatch) -> NoteRecord:
        current = self._records.get(note_id)
        if current is None:
            raise RemoteError(f"Note {note_id} not found")
        record = current.model_copy(update={**patch.changes(), "updated_at": utc_now()})
        self._records[note_id] = record
        return record

    async def delete(self, note_id: str) -> None:
        if self._records.pop(note_id, None) is None:
            raise RemoteError(f"Note {note_id} not found")


class InMemoryBlobStore(BlobStore):
    """Blob store keeping payloads in a dict. URLs use the memory:// scheme."""

    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}

    @property
    def backend_name(self) -> str:
        return "memory"

    async def upload(self, path: str, payload: bytes, content_type: str | None = None) -> None:
        self.blobs[path] = payload

    async def resolve_url(self, path: str) -> str:
        if path not in self.blobs:
            raise ResolutionError(f"No blob stored at {path}", path=path)
        return f"memory://{quote(path)}"

    async def remove(self, path: str) -> None:
        if self.blobs.pop(path, None) is None:
            raise StorageError(f"No blob stored at {path}")
