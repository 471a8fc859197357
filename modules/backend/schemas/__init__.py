# Pydantic schemas package
from modules.backend.schemas.base import OperationOutcome, OperationStatus
from modules.backend.schemas.note import (
    ImageUpload,
    NoteInput,
    NotePatch,
    NoteRecord,
    NoteView,
)

__all__ = [
    "ImageUpload",
    "NoteInput",
    "NotePatch",
    "NoteRecord",
    "NoteView",
    "OperationOutcome",
    "OperationStatus",
]
