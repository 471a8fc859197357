"""
Unit Tests for Note Schemas.

Tests defaulting, patch semantics, and the record/view split.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from modules.backend.core.exceptions import StorageError
from modules.backend.schemas.base import OperationOutcome, OperationStatus
from modules.backend.schemas.note import (
    DEFAULT_NOTE_NAME,
    ImageUpload,
    NoteInput,
    NotePatch,
    NoteRecord,
    NoteView,
)


class TestNoteInput:
    def test_defaults(self):
        data = NoteInput()
        assert data.name == DEFAULT_NOTE_NAME
        assert data.description == ""
        assert data.image is None

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_becomes_untitled(self, name):
        assert NoteInput(name=name).name == "Untitled"

    def test_none_description_becomes_empty(self):
        assert NoteInput(name="a", description=None).description == ""

    def test_name_length_limit(self):
        with pytest.raises(ValidationError):
            NoteInput(name="x" * 256)


class TestNotePatch:
    def test_empty_patch_has_no_changes(self):
        assert NotePatch().changes() == {}

    def test_only_set_fields_are_changes(self):
        assert NotePatch(description="new body").changes() == {"description": "new body"}

    def test_blank_name_becomes_untitled(self):
        assert NotePatch(name=" ").changes() == {"name": "Untitled"}

    def test_empty_description_is_a_change(self):
        assert NotePatch(description="").changes() == {"description": ""}

    def test_image_is_not_editable(self):
        with pytest.raises(ValidationError):
            NotePatch(image="images/other.png")


class TestNoteRecord:
    def test_is_frozen(self, make_record):
        record = make_record("n1")
        with pytest.raises(ValidationError):
            record.name = "changed"

    def test_null_text_fields_become_empty(self, make_record):
        record = make_record("n1")
        data = record.model_dump() | {"name": None, "description": None}
        loaded = NoteRecord(**data)
        assert loaded.name == ""
        assert loaded.description == ""


class TestNoteView:
    def test_from_record_keeps_fields(self, make_record):
        record = make_record("n1", name="Pic", image="images/a.png")

        view = NoteView.from_record(record, image_url="https://blobs.test/images/a.png")

        assert view.model_dump(exclude={"image_url"}) == record.model_dump()
        assert view.image_url == "https://blobs.test/images/a.png"

    def test_merged_keeps_image_url(self, make_record):
        view = NoteView.from_record(make_record("n1", image="images/a.png"), image_url="u")
        updated = make_record("n1", name="Renamed", image="images/a.png").model_copy(
            update={"updated_at": view.created_at + timedelta(minutes=5)}
        )

        merged = view.merged(updated)

        assert merged.name == "Renamed"
        assert merged.image_url == "u"
        assert merged.was_edited is True
        assert view.name == "Note"

    def test_display_name(self, make_record):
        assert NoteView.from_record(make_record("n1", name="")).display_name == "Untitled"
        assert NoteView.from_record(make_record("n1", name="Todo")).display_name == "Todo"

    def test_was_edited_false_when_timestamps_match(self, make_record):
        assert NoteView.from_record(make_record("n1")).was_edited is False


class TestImageUpload:
    def test_from_path(self, tmp_path):
        path = tmp_path / "cat.png"
        path.write_bytes(b"\x89PNG")

        upload = ImageUpload.from_path(path)

        assert upload.filename == "cat.png"
        assert upload.payload == b"\x89PNG"
        assert upload.content_type == "image/png"

    def test_unknown_type(self, tmp_path):
        path = tmp_path / "blob.unknownext"
        path.write_bytes(b"x")

        assert ImageUpload.from_path(path).content_type is None

    def test_filename_required(self):
        with pytest.raises(ValidationError):
            ImageUpload(filename="", payload=b"x")


class TestOperationOutcome:
    def test_of_without_warnings_is_success(self):
        outcome = OperationOutcome.of(42)
        assert outcome.status is OperationStatus.SUCCESS
        assert outcome.ok
        assert not outcome.degraded
        assert outcome.value == 42

    def test_of_with_warnings_is_degraded(self):
        warning = StorageError("denied")

        outcome = OperationOutcome.of(None, [warning])

        assert outcome.status is OperationStatus.DEGRADED
        assert outcome.ok
        assert outcome.degraded
        assert outcome.warnings == [warning]

    def test_skipped(self):
        outcome = OperationOutcome.skipped()
        assert outcome.status is OperationStatus.SKIPPED
        assert not outcome.ok
        assert outcome.value is None
