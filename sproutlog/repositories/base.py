"""
Storage-agnostic CRUD access by id.

The lifecycle and dashboard services only need "give me these rows"; they take a
Repository so the same code runs over the SQL tables or a plain in-memory map.
"""
from abc import ABC, abstractmethod
from collections.abc import Sequence
from copy import copy
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    @abstractmethod
    async def get(self, obj_id: int) -> Optional[T]:
        ...

    @abstractmethod
    async def list(self, **filters: Any) -> list[T]:
        """Return every object whose attributes equal the given filter values."""

    @abstractmethod
    async def add(self, obj: T) -> T:
        ...

    @abstractmethod
    async def update(self, obj: T, values: dict[str, Any]) -> T:
        ...

    @abstractmethod
    async def delete(self, obj: T) -> None:
        ...


class SqlAlchemyRepository(Repository[T]):
    model: type[T]
    # Loader options applied to every read, e.g. selectinload(Planting.plant)
    load_options: Sequence[Any] = ()
    order_by: Sequence[Any] = ()

    def __init__(self, db: AsyncSession):
        self.db = db

    def _select(self):
        stmt = select(self.model).options(*self.load_options)
        if self.order_by:
            stmt = stmt.order_by(*self.order_by)
        # Reload eager relationships on objects already in the identity map
        return stmt.execution_options(populate_existing=True)

    async def get(self, obj_id: int) -> Optional[T]:
        result = await self.db.execute(self._select().where(self.model.id == obj_id))
        return result.scalar_one_or_none()

    async def list(self, **filters: Any) -> list[T]:
        stmt = self._select().filter_by(**filters)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def add(self, obj: T) -> T:
        self.db.add(obj)
        await self.db.commit()
        return await self.get(obj.id)

    async def update(self, obj: T, values: dict[str, Any]) -> T:
        for field, value in values.items():
            setattr(obj, field, value)
        await self.db.commit()
        return await self.get(obj.id)

    async def delete(self, obj: T) -> None:
        await self.db.delete(obj)
        await self.db.commit()


class InMemoryRepository(Repository[T]):
    """Map-backed repository with an incrementing id counter."""

    def __init__(self, items: Optional[Sequence[T]] = None):
        self._items: dict[int, T] = {}
        self._next_id = 1
        for item in items or ():
            self._store(item)

    def _store(self, obj: T) -> T:
        if getattr(obj, "id", None) is None:
            obj.id = self._next_id
        self._next_id = max(self._next_id, obj.id + 1)
        self._items[obj.id] = obj
        return obj

    async def get(self, obj_id: int) -> Optional[T]:
        return self._items.get(obj_id)

    async def list(self, **filters: Any) -> list[T]:
        return [
            item for item in self._items.values()
            if all(getattr(item, field) == value for field, value in filters.items())
        ]

    async def add(self, obj: T) -> T:
        return self._store(obj)

    async def update(self, obj: T, values: dict[str, Any]) -> T:
        updated = copy(obj)
        for field, value in values.items():
            setattr(updated, field, value)
        self._items[updated.id] = updated
        return updated

    async def delete(self, obj: T) -> None:
        self._items.pop(obj.id, None)
