# Folders group notes; each note sits in at most one
import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .note import Note
    from .user import User


class Folder(BaseModel):
    """Named folder owned by one user."""

    __tablename__ = "folders"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    owner: Mapped["User"] = relationship("User", back_populates="folders")
    notes: Mapped[List["Note"]] = relationship(
        "Note", back_populates="folder", passive_deletes=True
    )

    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_folders_owner_name"),
        Index("idx_folders_owner_id", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Folder(name='{self.name}', owner_id={self.owner_id})>"
