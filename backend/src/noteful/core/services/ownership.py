"""Referential-integrity checks for note mutations.

A note may only point at a folder and tags owned by the same account. Both
checks are independent reads, so they run concurrently, each on its own
short-lived session. Any failure aborts the mutation before it is written.
"""

import asyncio
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..exceptions import InvalidReference
from ..logging import get_logger
from ..models.types import parse_id
from ..repositories.folder_repository import FolderRepository
from ..repositories.tag_repository import TagRepository

logger = get_logger("ownership")


class OwnershipValidator:
    """Asserts that referenced folders and tags exist and belong to an owner."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @classmethod
    def for_session(cls, session: AsyncSession) -> "OwnershipValidator":
        """Validator reading through the same engine as ``session``."""
        return cls(async_sessionmaker(session.bind, expire_on_commit=False))

    async def validate_folder(self, folder_id: Any, owner_id: UUID) -> None:
        if folder_id is None or folder_id == "":
            return

        parsed = parse_id(folder_id)
        if parsed is None:
            raise InvalidReference("folder_id")

        async with self.session_factory() as session:
            found = await FolderRepository(session).count(id=parsed, owner_id=owner_id)

        if found < 1:
            logger.debug("Folder reference rejected", extra={"folder_id": str(parsed)})
            raise InvalidReference("folder_id")

    async def validate_tags(self, tag_ids: Any, owner_id: UUID) -> None:
        if tag_ids is None:
            return

        if not isinstance(tag_ids, (list, tuple, set, frozenset)):
            raise InvalidReference("tags", "The `tags` are not valid")

        parsed = [parse_id(tag_id) for tag_id in tag_ids]
        if any(tag_id is None for tag_id in parsed):
            raise InvalidReference("tags", "The `tags` array contains an invalid `id`")
        if not parsed:
            return

        async with self.session_factory() as session:
            found = await TagRepository(session).count(id=parsed, owner_id=owner_id)

        # duplicates in the input count once in the store, so they fail too
        if found != len(parsed):
            logger.debug(
                "Tag references rejected", extra={"requested": len(parsed), "found": found}
            )
            raise InvalidReference("tags", "The `tags` are not valid")

    async def validate(
        self, owner_id: UUID, folder_id: Optional[Any] = None, tag_ids: Optional[Any] = None
    ) -> None:
        """Run both checks concurrently.

        The first failure propagates, and only after the other check has been
        cancelled and has finished, so no read outlives the call.
        """
        checks = [
            asyncio.ensure_future(self.validate_folder(folder_id, owner_id)),
            asyncio.ensure_future(self.validate_tags(tag_ids, owner_id)),
        ]
        try:
            await asyncio.gather(*checks)
        except BaseException:
            for check in checks:
                check.cancel()
            await asyncio.gather(*checks, return_exceptions=True)
            raise
