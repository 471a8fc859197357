"""
SQL Note Store.

Note store backed by an async SQLAlchemy database. Each call runs in its
own session and commits before returning, so a record the service sees
is durable. Database failures surface as RemoteError.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from modules.backend.core.exceptions import NotFoundError, RemoteError
from modules.backend.core.logging import get_logger
from modules.backend.core.utils import utc_now
from modules.backend.repositories.note import NoteRepository
from modules.backend.schemas.note import NoteInput, NotePatch, NoteRecord
from modules.backend.stores.base import NoteStore

logger = get_logger(__name__)


class SqlNoteStore(NoteStore):
    """
    Note store over a SQLAlchemy session factory.

    Usage:
        store = SqlNoteStore(get_session_factory())
        records = await store.list_all()
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @property
    def backend_name(self) -> str:
        return "sql"

    @asynccontextmanager
    async def _repository(self, operation: str) -> AsyncIterator[NoteRepository]:
        """
        Open a session, yield a repository and commit on success.

        Converts NotFoundError and SQLAlchemy exceptions to RemoteError.
        """
        try:
            async with self._session_factory() as session:
                try:
                    yield NoteRepository(session)
                    await session.commit()
                except BaseException:
                    await session.rollback()
                    raise
        except NotFoundError as e:
            raise RemoteError(f"{e.message}: {operation}") from e
        except SQLAlchemyError as e:
            logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise RemoteError(f"Database operation failed: {operation}") from e

    async def list_all(self) -> list[NoteRecord]:
        async with self._repository("list_notes") as repo:
            notes = await repo.get_all_newest_first()
            return [NoteRecord.model_validate(note) for note in notes]

    async def create(self, data: NoteInput) -> NoteRecord:
        async with self._repository("create_note") as repo:
            now = utc_now()
            note = await repo.create(
                name=data.name,
                description=data.description,
                image=data.image,
                created_at=now,
                updated_at=now,
            )
            return NoteRecord.model_validate(note)

    async def update(self, note_id: str, patch: NotePatch) -> NoteRecord:
        async with self._repository("update_note") as repo:
            note = await repo.update(note_id, **patch.changes())
            return NoteRecord.model_validate(note)

    async def delete(self, note_id: str) -> None:
        async with self._repository("delete_note") as repo:
            await repo.delete(note_id)
