"""
Document store client over an ``AsyncSession``.

Each ``DocumentStore`` is bound to one session and one ORM model and
speaks in plain dicts: a *query* is a mapping of attribute name to the
value it must equal, and *data* is a mapping of attribute name to the
value to write.  Storage errors (``sqlalchemy.exc.SQLAlchemyError``) are
never caught here.

Like the service functions this replaces, the store flushes but does not
commit; the ``get_db`` dependency owns the transaction.
"""
from typing import Any, Mapping

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base


class DocumentStore:
    def __init__(self, db: AsyncSession, model: type[Base]) -> None:
        self.db = db
        self.model = model

    def _where(self, query: Mapping[str, Any]) -> list:
        return [getattr(self.model, key) == value for key, value in query.items()]

    def _ordered(self, query: Mapping[str, Any]):
        return (
            select(self.model)
            .where(*self._where(query))
            .order_by(self.model.created_at, self.model.id)
            .execution_options(populate_existing=True)
        )

    async def insert_row(self, data: Mapping[str, Any]):
        row = self.model(**data)
        self.db.add(row)
        await self.db.flush()
        return row

    async def find_row(self, query: Mapping[str, Any]):
        result = await self.db.execute(self._ordered(query).limit(1))
        return result.scalar_one_or_none()

    async def find_rows(self, query: Mapping[str, Any]) -> list:
        result = await self.db.execute(self._ordered(query))
        return list(result.scalars().all())

    async def update_row(self, query: Mapping[str, Any], data: Mapping[str, Any]):
        """
        Apply *data* to the first row matching *query* and return it, or
        None when nothing matches.  The row is locked for the rest of the
        transaction on backends that support ``FOR UPDATE``.
        """
        result = await self.db.execute(self._ordered(query).limit(1).with_for_update())
        row = result.scalar_one_or_none()
        if row is None:
            return None

        for field, value in data.items():
            setattr(row, field, value)
        await self.db.flush()
        return row

    async def update_rows(self, query: Mapping[str, Any], data: Mapping[str, Any]) -> int:
        """Apply *data* to every row matching *query* in one statement."""
        stmt = (
            update(self.model)
            .where(*self._where(query))
            .values(**data)
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.db.execute(stmt)
        return result.rowcount
