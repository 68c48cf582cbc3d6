# Tag models for organizing notes
import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import Column, ForeignKey, Index, String, Table, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .note import Note
    from .user import User


# Links notes to tags. Rows go away with either side.
note_tags = Table(
    "note_tags",
    BaseModel.metadata,
    Column("note_id", GUID(), ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", GUID(), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_note_tags_tag_id", "tag_id"),
)


class Tag(BaseModel):
    """Tag for categorizing notes, owned by one user."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    owner: Mapped["User"] = relationship("User", back_populates="tags")
    notes: Mapped[List["Note"]] = relationship(
        "Note",
        secondary=note_tags,
        back_populates="tags",
        passive_deletes=True,
        doc="Notes that have this tag",
    )

    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_tags_owner_name"),
        Index("idx_tags_owner_id", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Tag(name='{self.name}')>"
