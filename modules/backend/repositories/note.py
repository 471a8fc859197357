"""
Note Repository.

Queries on the notes table beyond primary-key CRUD.
"""

from sqlalchemy import select

from modules.backend.models.note import Note
from modules.backend.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    model = Note

    async def get_all_newest_first(self) -> list[Note]:
        """Every note, most recently created first. Ties break on id."""
        result = await self.session.scalars(
            select(Note).order_by(Note.created_at.desc(), Note.id)
        )
        return list(result.all())
