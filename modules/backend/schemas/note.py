"""
Note Schemas.

Pydantic schemas exchanged with the note store and handed to the
presentation layer. ``NoteRecord`` is what the store persists;
``NoteView`` adds the resolved image URL and never travels back.
"""

import mimetypes
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_NOTE_NAME = "Untitled"


def _default_name(value: str | None) -> str:
    if value is None or not value.strip():
        return DEFAULT_NOTE_NAME
    return value


class NoteInput(BaseModel):
    """Schema for creating a note record."""

    name: str = Field(
        default=DEFAULT_NOTE_NAME,
        max_length=255,
        description="Note title, blank means Untitled",
        examples=["Groceries"],
    )
    description: str = Field(
        default="",
        description="Note body",
        examples=["Milk, eggs, bread"],
    )
    image: str | None = Field(
        default=None,
        description="Blob store path of the attached image",
    )

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, value: str | None) -> str:
        return _default_name(value)

    @field_validator("description", mode="before")
    @classmethod
    def none_to_empty(cls, value: str | None) -> str:
        return value or ""


class NotePatch(BaseModel):
    """
    Schema for editing an existing note.

    Only fields that are set are sent to the store. A blank name is
    committed as Untitled. The image is not editable.
    """

    name: str | None = None
    description: str | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def default_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _default_name(value)

    def changes(self) -> dict[str, str]:
        """Fields to send to the store."""
        return self.model_dump(exclude_none=True)


class NoteRecord(BaseModel):
    """Note as stored and returned by the note store."""

    id: str = Field(description="Store-assigned identifier")
    name: str = Field(default="", description="Note title")
    description: str = Field(default="", description="Note body")
    image: str | None = Field(default=None, description="Blob store path")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("name", "description", mode="before")
    @classmethod
    def none_to_empty(cls, value: str | None) -> str:
        return value or ""


class NoteView(NoteRecord):
    """
    Note as shown to the user.

    Carries ``image_url``, a display URL resolved from ``image`` for the
    current session only.
    """

    image_url: str | None = Field(default=None, description="Resolved display URL")

    @classmethod
    def from_record(cls, record: NoteRecord, image_url: str | None = None) -> "NoteView":
        return cls(**record.model_dump(), image_url=image_url)

    def merged(self, record: NoteRecord) -> "NoteView":
        """Return a copy with the record's fields, keeping ``image_url``."""
        return self.model_copy(update=record.model_dump())

    @property
    def display_name(self) -> str:
        return self.name or DEFAULT_NOTE_NAME

    @property
    def was_edited(self) -> bool:
        return self.updated_at != self.created_at


class ImageUpload(BaseModel):
    """Image selected for upload alongside a new note."""

    filename: str = Field(min_length=1)
    payload: bytes
    content_type: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_path(cls, path: str | Path) -> "ImageUpload":
        """Read an image file from disk."""
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(filename=path.name, payload=path.read_bytes(), content_type=content_type)
