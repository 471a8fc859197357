"""
Base Repository.

Primary-key CRUD on one model inside a caller-owned session. The
repository flushes but never commits; SqlNoteStore commits per call.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.exceptions import NotFoundError
from modules.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    CRUD for ``model``, keyed by its string ``id``.

        class NoteRepository(BaseRepository[Note]):
            model = Note
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, id: str) -> ModelType:
        """
        Load one row.

        Raises:
            NotFoundError: If no row has this id
        """
        instance = await self.session.scalar(select(self.model).where(self.model.id == id))
        if instance is None:
            raise NotFoundError(f"{self.model.__name__} {id} not found")
        return instance

    async def create(self, **values: Any) -> ModelType:
        instance = self.model(**values)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: str, **values: Any) -> ModelType:
        """
        Set columns on an existing row and return it refreshed.

        Raises:
            NotFoundError: If no row has this id
            ValueError: If a key is not a column of the model
        """
        columns = self.model.__table__.columns.keys()
        unknown = set(values) - set(columns)
        if unknown:
            raise ValueError(f"Not columns of {self.model.__name__}: {sorted(unknown)}")

        instance = await self.get(id)
        for key, value in values.items():
            setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id: str) -> None:
        """
        Raises:
            NotFoundError: If no row has this id
        """
        instance = await self.get(id)
        await self.session.delete(instance)
        await self.session.flush()
