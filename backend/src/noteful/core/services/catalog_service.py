"""Folder and tag services.

Folders and tags are both owned, uniquely named entries that notes refer
to; they share one implementation and differ only in what deleting an
entry does to the notes pointing at it.
"""

from typing import Generic, List, Optional, Type, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel as Schema
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import DuplicateName, MissingField, NotFound
from ..logging import get_logger
from ..models.types import parse_id
from ..repositories.folder_repository import FolderRepository
from ..repositories.tag_repository import TagRepository
from ..schemas.catalog import FolderResponse, NameRequest, TagResponse
from .interfaces import ICatalogService

logger = get_logger("catalog")

ResponseT = TypeVar("ResponseT", bound=Schema)
EntryId = Union[str, UUID]


class CatalogService(ICatalogService, Generic[ResponseT]):
    """CRUD over one kind of owned, named entry."""

    kind: str
    repository_class: Type[Union[FolderRepository, TagRepository]]
    response_model: Type[ResponseT]

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = self.repository_class(session)

    async def list_entries(self, owner_id: UUID) -> List[ResponseT]:
        entries = await self.repo.list_for_owner(owner_id)
        return [self.response_model.model_validate(entry) for entry in entries]

    async def get_entry(self, entry_id: EntryId, owner_id: UUID) -> ResponseT:
        parsed = parse_id(entry_id)
        entry = await self.repo.find_one(id=parsed, owner_id=owner_id) if parsed else None
        if entry is None:
            raise NotFound()
        return self.response_model.model_validate(entry)

    async def create_entry(self, owner_id: UUID, request: NameRequest) -> ResponseT:
        name = self._clean_name(request)
        if await self.repo.count(owner_id=owner_id, name=name):
            raise DuplicateName(self.kind)

        try:
            entry = await self.repo.insert({"name": name, "owner_id": owner_id})
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateName(self.kind)

        logger.info(f"Created {self.kind}", extra={"entry_id": str(entry.id)})
        return self.response_model.model_validate(entry)

    async def rename_entry(
        self, entry_id: EntryId, owner_id: UUID, request: NameRequest
    ) -> ResponseT:
        parsed = parse_id(entry_id)
        if parsed is None:
            raise NotFound()
        name = self._clean_name(request)

        clash = await self.repo.find_one(owner_id=owner_id, name=name)
        if clash is not None and clash.id != parsed:
            raise DuplicateName(self.kind)

        try:
            entry = await self.repo.update_one({"id": parsed, "owner_id": owner_id}, {"name": name})
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateName(self.kind)

        if entry is None:
            raise NotFound()
        return self.response_model.model_validate(entry)

    async def delete_entry(self, entry_id: EntryId, owner_id: UUID) -> None:
        parsed = parse_id(entry_id)
        if parsed is None or not await self.repo.delete_for_owner(parsed, owner_id):
            raise NotFound()
        logger.info(f"Deleted {self.kind}", extra={"entry_id": str(parsed)})

    @staticmethod
    def _clean_name(request: NameRequest) -> str:
        name: Optional[str] = (request.name or "").strip()
        if not name:
            raise MissingField("name")
        return name


class FolderService(CatalogService[FolderResponse]):
    """Deleting a folder leaves its notes unfiled."""

    kind = "folder"
    repository_class = FolderRepository
    response_model = FolderResponse


class TagService(CatalogService[TagResponse]):
    """Deleting a tag removes it from every note."""

    kind = "tag"
    repository_class = TagRepository
    response_model = TagResponse
