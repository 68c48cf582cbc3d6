"""Tag repository for database operations."""

from typing import Iterable, List
from uuid import UUID

from sqlalchemy import delete

from ..models.tag import Tag, note_tags
from .base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    model = Tag

    async def list_for_owner(self, owner_id: UUID) -> List[Tag]:
        return await self.find(owner_id=owner_id, order_by=[Tag.name])

    async def get_many_for_owner(self, tag_ids: Iterable[UUID], owner_id: UUID) -> List[Tag]:
        ids = list(tag_ids)
        if not ids:
            return []
        return await self.find(id=ids, owner_id=owner_id)

    async def delete_for_owner(self, tag_id: UUID, owner_id: UUID) -> bool:
        """Delete a tag and remove it from every note carrying it."""
        tag = await self.find_one(id=tag_id, owner_id=owner_id)
        if tag is None:
            return False

        await self.session.execute(delete(note_tags).where(note_tags.c.tag_id == tag.id))
        await self.session.execute(delete(Tag).where(Tag.id == tag.id))
        await self.session.commit()
        return True
