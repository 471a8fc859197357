"""
Integration Tests for the notes CLI.

Runs the note commands end to end through Typer with shared in-memory
stores standing in for the configured backends.
"""

from unittest.mock import patch

import pytest
from rich.console import Console
from typer.testing import CliRunner

from cli import app
from modules.backend.core.exceptions import StorageError
from modules.backend.stores.memory import InMemoryBlobStore, InMemoryNoteStore

runner = CliRunner()


@pytest.fixture
def stores():
    note_store = InMemoryNoteStore()
    blob_store = InMemoryBlobStore()
    with patch("modules.cli.client.build_note_store", return_value=note_store), \
         patch("modules.cli.client.build_blob_store", return_value=blob_store), \
         patch("modules.cli.commands.notes.console", Console(width=200)):
        yield note_store, blob_store


def _records(note_store):
    return list(note_store._records.values())


class TestList:
    def test_empty(self, stores):
        result = runner.invoke(app, ["notes", "list"])

        assert result.exit_code == 0
        assert "No notes yet" in result.stdout

    def test_shows_notes(self, stores):
        runner.invoke(app, ["notes", "create", "-n", "Groceries", "-b", "Milk"])

        result = runner.invoke(app, ["notes", "list"])

        assert result.exit_code == 0
        assert "Groceries" in result.stdout
        assert "Milk" in result.stdout


class TestCreate:
    def test_text_note(self, stores):
        note_store, _ = stores

        result = runner.invoke(app, ["notes", "create", "--name", "Groceries"])

        assert result.exit_code == 0
        (record,) = _records(note_store)
        assert record.name == "Groceries"
        assert f"Created note {record.id}" in result.stdout

    def test_with_image(self, stores, tmp_path):
        note_store, blob_store = stores
        image = tmp_path / "cat.png"
        image.write_bytes(b"\x89PNG")

        result = runner.invoke(app, ["notes", "create", "--image", str(image)])

        assert result.exit_code == 0
        (record,) = _records(note_store)
        assert record.name == "Untitled"
        assert record.image.endswith("-cat.png")
        assert blob_store.blobs[record.image] == b"\x89PNG"

    def test_empty_note(self, stores):
        note_store, _ = stores

        result = runner.invoke(app, ["notes", "create"])

        assert result.exit_code == 1
        assert "Nothing to save" in result.stdout
        assert _records(note_store) == []


class TestEdit:
    def test_renames(self, stores):
        note_store, _ = stores
        runner.invoke(app, ["notes", "create", "-n", "Old", "-b", "Body"])
        (record,) = _records(note_store)

        result = runner.invoke(app, ["notes", "edit", record.id, "-n", "New"])

        assert result.exit_code == 0
        (updated,) = _records(note_store)
        assert updated.name == "New"
        assert updated.description == "Body"

    def test_unknown_note(self, stores):
        result = runner.invoke(app, ["notes", "edit", "missing", "-n", "New"])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_nothing_to_change(self, stores):
        note_store, _ = stores
        runner.invoke(app, ["notes", "create", "-n", "Old"])
        (record,) = _records(note_store)

        result = runner.invoke(app, ["notes", "edit", record.id])

        assert result.exit_code == 0
        assert "Nothing to change" in result.stdout

    def test_name_too_long(self, stores):
        note_store, _ = stores
        runner.invoke(app, ["notes", "create", "-n", "Old"])
        (record,) = _records(note_store)

        result = runner.invoke(app, ["notes", "edit", record.id, "-n", "x" * 300])

        assert result.exit_code == 1
        assert "Error: name too long" in result.stdout
        assert "VAL_VALIDATION_ERROR" in result.stdout
        (unchanged,) = _records(note_store)
        assert unchanged.name == "Old"

    def test_shows_image_warnings_from_reload(self, stores, tmp_path):
        """A note whose image is gone still loads, with a warning."""
        note_store, blob_store = stores
        image = tmp_path / "cat.png"
        image.write_bytes(b"x")
        runner.invoke(app, ["notes", "create", "-n", "Pic", "-i", str(image)])
        (record,) = _records(note_store)
        blob_store.blobs.clear()

        result = runner.invoke(app, ["notes", "edit", record.id, "-b", "Body"])

        assert result.exit_code == 0
        assert f"Warning: No blob stored at {record.image}" in result.stdout
        assert "Updated note" in result.stdout


class TestDelete:
    def test_removes_note_and_image(self, stores, tmp_path):
        note_store, blob_store = stores
        image = tmp_path / "cat.png"
        image.write_bytes(b"x")
        runner.invoke(app, ["notes", "create", "-n", "Pic", "-i", str(image)])
        (record,) = _records(note_store)

        result = runner.invoke(app, ["notes", "delete", record.id])

        assert result.exit_code == 0
        assert _records(note_store) == []
        assert blob_store.blobs == {}

    def test_image_removal_failure_is_a_warning(self, stores, tmp_path):
        note_store, blob_store = stores
        image = tmp_path / "cat.png"
        image.write_bytes(b"x")
        runner.invoke(app, ["notes", "create", "-n", "Pic", "-i", str(image)])
        (record,) = _records(note_store)

        with patch.object(blob_store, "remove", side_effect=StorageError("denied")):
            result = runner.invoke(app, ["notes", "delete", record.id])

        assert result.exit_code == 0
        assert "Deleted note" in result.stdout
        assert "Warning: denied" in result.stdout
        assert _records(note_store) == []

    def test_unknown_note(self, stores):
        result = runner.invoke(app, ["notes", "delete", "missing"])

        assert result.exit_code == 1
        assert "not found" in result.stdout
