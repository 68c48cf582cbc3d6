"""Note service implementation."""

from typing import Any, Dict, Iterable, List, Optional, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import InvalidReference, MissingField, NotFound
from ..logging import get_logger
from ..models.tag import Tag
from ..models.types import parse_id
from ..repositories.note_repository import NoteRepository
from ..repositories.tag_repository import TagRepository
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from .interfaces import INoteService
from .ownership import OwnershipValidator

logger = get_logger("notes")

NoteId = Union[str, UUID]


class NoteService(INoteService):
    """Owner-scoped note CRUD with reference validation before every write."""

    def __init__(self, session: AsyncSession, validator: Optional[OwnershipValidator] = None):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.tag_repo = TagRepository(session)
        self.validator = validator or OwnershipValidator.for_session(session)

    async def list_notes(
        self,
        owner_id: UUID,
        search_term: Optional[str] = None,
        folder_id: Optional[str] = None,
        tag_id: Optional[str] = None,
    ) -> List[NoteResponse]:
        """List the owner's notes, newest first. Unknown filters match nothing."""
        folder_uuid = tag_uuid = None
        if folder_id:
            folder_uuid = parse_id(folder_id)
            if folder_uuid is None:
                return []
        if tag_id:
            tag_uuid = parse_id(tag_id)
            if tag_uuid is None:
                return []

        notes = await self.note_repo.list_notes(
            owner_id, search_term=search_term, folder_id=folder_uuid, tag_id=tag_uuid
        )
        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, note_id: NoteId, owner_id: UUID) -> NoteResponse:
        """Get note by ID. Malformed, missing and foreign ids all look the same."""
        parsed = parse_id(note_id)
        if parsed is None:
            raise NotFound()

        note = await self.note_repo.get_by_id_and_owner(parsed, owner_id)
        if note is None:
            raise NotFound()
        return NoteResponse.model_validate(note)

    async def create_note(self, owner_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        if not request.title:
            raise MissingField("title")

        # an empty folder id means "no folder"
        folder_id = None if request.folder_id in (None, "") else request.folder_id
        await self.validator.validate(owner_id, folder_id=folder_id, tag_ids=request.tags)

        note_data = {
            "title": request.title,
            "content": request.content,
            "owner_id": owner_id,
            "folder_id": parse_id(folder_id) if folder_id else None,
        }
        tags = await self._load_tags(request.tags or [], owner_id)

        note = await self.note_repo.create_note(note_data, tags)
        logger.info("Created note", extra={"note_id": str(note.id), "owner_id": str(owner_id)})
        return NoteResponse.model_validate(note)

    async def update_note(
        self, note_id: NoteId, owner_id: UUID, request: NoteUpdate
    ) -> NoteResponse:
        """Apply only the fields present in ``request``."""
        parsed = parse_id(note_id)
        if parsed is None:
            raise NotFound()

        supplied = request.model_fields_set
        update_data: Dict[str, Any] = {}
        folder_to_check = None
        tags_to_check = None

        if "title" in supplied:
            if not request.title:
                raise MissingField("title")
            update_data["title"] = request.title

        if "content" in supplied:
            update_data["content"] = request.content

        if "folder_id" in supplied:
            if request.folder_id not in (None, ""):
                folder_to_check = request.folder_id
            else:
                # explicit "" or null unsets the folder
                update_data["folder_id"] = None

        if "tags" in supplied:
            if request.tags is None:
                raise InvalidReference("tags", "The `tags` are not valid")
            tags_to_check = request.tags

        await self.validator.validate(owner_id, folder_id=folder_to_check, tag_ids=tags_to_check)

        if folder_to_check is not None:
            update_data["folder_id"] = parse_id(folder_to_check)
        tags = await self._load_tags(tags_to_check, owner_id) if tags_to_check is not None else None

        note = await self.note_repo.update_note(parsed, owner_id, update_data, tags)
        if note is None:
            raise NotFound()
        return NoteResponse.model_validate(note)

    async def delete_note(self, note_id: NoteId, owner_id: UUID) -> None:
        """Delete note. Deleting something that is not there is NotFound."""
        parsed = parse_id(note_id)
        if parsed is None or not await self.note_repo.delete_note(parsed, owner_id):
            raise NotFound()
        logger.info("Deleted note", extra={"note_id": str(parsed), "owner_id": str(owner_id)})

    async def _load_tags(self, tag_ids: Iterable[str], owner_id: UUID) -> List[Tag]:
        ids = {parse_id(tag_id) for tag_id in tag_ids}
        return await self.tag_repo.get_many_for_owner(ids, owner_id)
