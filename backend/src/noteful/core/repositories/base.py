"""Generic owner-agnostic persistence operations shared by all repositories."""

from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseRepository(Generic[ModelT]):
    """Filter-based CRUD over a single model.

    Filters are keyword arguments naming model columns. A list, tuple or set
    value becomes an ``IN`` clause, anything else an equality test. Callers
    must validate identifier shape before building a filter.
    """

    model: Type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    def _where(self, filters: Dict[str, Any]) -> list:
        clauses = []
        for key, value in filters.items():
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple, set, frozenset)):
                clauses.append(column.in_(list(value)))
            else:
                clauses.append(column == value)
        return clauses

    async def find(self, *, order_by: Sequence[Any] = (), **filters: Any) -> List[ModelT]:
        stmt = select(self.model).where(*self._where(filters))
        if order_by:
            stmt = stmt.order_by(*order_by)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_one(self, **filters: Any) -> Optional[ModelT]:
        stmt = select(self.model).where(*self._where(filters)).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def count(self, **filters: Any) -> int:
        stmt = select(func.count()).select_from(self.model).where(*self._where(filters))
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def insert(self, data: Dict[str, Any]) -> ModelT:
        record = self.model(**data)
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)
        return record

    async def update_one(self, filters: Dict[str, Any], patch: Dict[str, Any]) -> Optional[ModelT]:
        """Apply ``patch`` to the first record matching ``filters`` and return it."""
        record = await self.find_one(**filters)
        if record is None:
            return None

        for key, value in patch.items():
            setattr(record, key, value)

        await self.session.commit()
        await self.session.refresh(record)
        return record

    async def delete_one(self, **filters: Any) -> bool:
        """Delete the record matching ``filters``. Returns whether one existed."""
        record = await self.find_one(**filters)
        if record is None:
            return False

        await self.session.execute(delete(self.model).where(self.model.id == record.id))
        await self.session.commit()
        return True
