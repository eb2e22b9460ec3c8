"""Entity store adapter.

Thin CRUD layer over the async session used by the business, catalog and
appointment managers. It owns no business rules: it only reads by identifier
or equality filters, inserts and updates, and turns driver failures into
StoreError after rolling the session back.
"""

import logging
from typing import Any, Iterable, Optional, Sequence
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import StoreError

logger = logging.getLogger(__name__)


def parse_id(value: Any) -> Optional[UUID]:
    """Coerce an identifier to UUID, or None when it cannot be one."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


class EntityStore:
    """Filtered read / insert / update access to ORM records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, model, record_id: Any):
        """Fetch one record by primary key. Malformed ids resolve to None."""
        pk = parse_id(record_id)
        if pk is None:
            return None
        try:
            result = await self.db.execute(select(model).where(model.id == pk))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._fail(f"read {model.__tablename__}", e)

    async def select(
        self,
        model,
        order_by: Optional[str] = None,
        descending: bool = False,
        options: Iterable = (),
        **filters: Any,
    ) -> Sequence:
        """Return records matching every equality filter, optionally ordered."""
        query = select(model)
        for field, value in filters.items():
            query = query.where(getattr(model, field) == value)
        if order_by:
            column = getattr(model, order_by)
            query = query.order_by(column.desc() if descending else column.asc())
        for option in options:
            query = query.options(option)

        try:
            result = await self.db.execute(query)
            return result.scalars().all()
        except SQLAlchemyError as e:
            await self._fail(f"read {model.__tablename__}", e)

    async def insert(self, model, **values: Any):
        """Persist a new record and return it with generated fields populated."""
        record = model(**values)
        try:
            self.db.add(record)
            await self.db.commit()
            await self.db.refresh(record)
        except SQLAlchemyError as e:
            await self._fail(f"insert into {model.__tablename__}", e)
        return record

    async def update(self, record, **values: Any):
        """Apply field changes to an already-loaded record and persist them."""
        for key, value in values.items():
            setattr(record, key, value)
        try:
            await self.db.commit()
            await self.db.refresh(record)
        except SQLAlchemyError as e:
            await self._fail(f"update {record.__tablename__}", e)
        return record

    async def _fail(self, action: str, error: SQLAlchemyError):
        logger.error(f"Store failure during {action}: {error}")
        await self.db.rollback()
        raise StoreError(f"Failed to {action}: {error}") from error
