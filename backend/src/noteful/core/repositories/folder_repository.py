"""Folder repository for database operations."""

from typing import List
from uuid import UUID

from sqlalchemy import delete, update

from ..models.folder import Folder
from ..models.note import Note
from .base import BaseRepository


class FolderRepository(BaseRepository[Folder]):
    model = Folder

    async def list_for_owner(self, owner_id: UUID) -> List[Folder]:
        return await self.find(owner_id=owner_id, order_by=[Folder.name])

    async def delete_for_owner(self, folder_id: UUID, owner_id: UUID) -> bool:
        """Delete a folder and leave its notes unfiled."""
        folder = await self.find_one(id=folder_id, owner_id=owner_id)
        if folder is None:
            return False

        await self.session.execute(
            update(Note)
            .where(Note.folder_id == folder.id, Note.owner_id == owner_id)
            .values(folder_id=None)
        )
        await self.session.execute(delete(Folder).where(Folder.id == folder.id))
        await self.session.commit()
        return True
