"""
Note Model.

Database model backing the SQL note store.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from modules.backend.models.base import Base, TimestampMixin, UUIDMixin


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    A titled text note with an optional image attachment. ``image`` holds
    the blob store path, never a resolved URL.
    """

    __tablename__ = "notes"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )
    image: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, name={self.name!r})>"
