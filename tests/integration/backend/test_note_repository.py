"""Integration tests for NoteRepository inside a single session."""

import pytest

from modules.backend.core.exceptions import NotFoundError
from modules.backend.repositories.note import NoteRepository

pytestmark = pytest.mark.integration


@pytest.fixture
async def repo(db_session_factory):
    async with db_session_factory() as session:
        yield NoteRepository(session)


class TestNoteRepository:
    async def test_create_assigns_uuid(self, repo):
        note = await repo.create(name="Groceries", description="Milk")

        assert len(note.id) == 36
        assert (await repo.get(note.id)) is note

    async def test_update_sets_columns(self, repo):
        note = await repo.create(name="Old", description="Body")

        updated = await repo.update(note.id, name="New")

        assert updated.name == "New"
        assert updated.description == "Body"

    async def test_update_rejects_unknown_column(self, repo):
        note = await repo.create(name="Old")

        with pytest.raises(ValueError, match="image_url"):
            await repo.update(note.id, image_url="https://blobs.test/a.png")

    async def test_missing_id(self, repo):
        with pytest.raises(NotFoundError, match="Note missing not found"):
            await repo.get("missing")
        with pytest.raises(NotFoundError):
            await repo.update("missing", name="x")
        with pytest.raises(NotFoundError):
            await repo.delete("missing")

    async def test_delete(self, repo):
        note = await repo.create(name="Gone")

        await repo.delete(note.id)

        assert await repo.get_all_newest_first() == []
