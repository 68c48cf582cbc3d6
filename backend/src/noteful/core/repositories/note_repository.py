"""Note repository for database operations."""

from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, desc, or_, select
from sqlalchemy.orm import selectinload

from ..models.base import utcnow
from ..models.note import Note
from ..models.tag import Tag, note_tags
from .base import BaseRepository


def _contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` literally anywhere in the value."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class NoteRepository(BaseRepository[Note]):
    """Repository for note database operations. Every query is owner-scoped."""

    model = Note

    async def get_by_id_and_owner(self, note_id: UUID, owner_id: UUID) -> Optional[Note]:
        """Get note by ID if owned by user, with tags freshly loaded."""
        stmt = (
            select(Note)
            .options(selectinload(Note.tags))
            .where(Note.id == note_id, Note.owner_id == owner_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_notes(
        self,
        owner_id: UUID,
        search_term: Optional[str] = None,
        folder_id: Optional[UUID] = None,
        tag_id: Optional[UUID] = None,
    ) -> List[Note]:
        """List the owner's notes matching every supplied filter, newest first."""
        stmt = select(Note).options(selectinload(Note.tags)).where(Note.owner_id == owner_id)

        if search_term:
            pattern = _contains_pattern(search_term)
            stmt = stmt.where(
                or_(
                    Note.title.ilike(pattern, escape="\\"),
                    Note.content.ilike(pattern, escape="\\"),
                )
            )

        if folder_id is not None:
            stmt = stmt.where(Note.folder_id == folder_id)

        if tag_id is not None:
            stmt = stmt.where(Note.tags.any(Tag.id == tag_id))

        stmt = stmt.order_by(desc(Note.updated_at))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_note(self, note_data: Dict[str, Any], tags: Sequence[Tag] = ()) -> Note:
        """Insert a note with its tag links and return it reloaded."""
        note = Note(**note_data)
        note.tags = list(tags)
        self.session.add(note)
        await self.session.commit()
        return await self.get_by_id_and_owner(note.id, note.owner_id)

    async def update_note(
        self,
        note_id: UUID,
        owner_id: UUID,
        update_data: Dict[str, Any],
        tags: Optional[Sequence[Tag]] = None,
    ) -> Optional[Note]:
        """Apply a partial update to an owned note. ``tags=None`` leaves tags alone."""
        note = await self.get_by_id_and_owner(note_id, owner_id)
        if note is None:
            return None

        for key, value in update_data.items():
            setattr(note, key, value)
        if tags is not None:
            note.tags = list(tags)
        # tag-only changes do not touch the notes row, so bump explicitly
        note.updated_at = utcnow()

        await self.session.commit()
        return await self.get_by_id_and_owner(note_id, owner_id)

    async def delete_note(self, note_id: UUID, owner_id: UUID) -> bool:
        """Delete note and its tag links if owned by user."""
        note = await self.find_one(id=note_id, owner_id=owner_id)
        if note is None:
            return False

        await self.session.execute(delete(note_tags).where(note_tags.c.note_id == note.id))
        await self.session.execute(delete(Note).where(Note.id == note.id))
        await self.session.commit()
        return True
