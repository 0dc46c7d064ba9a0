"""Async repository pattern for database access.

Provides a generic base repository keyed by the model's primary-key
column, with CRUD operations and equality filters. Verticals subclass this
to set the model and key, and expose it through a FastAPI dependency.

Statements run against the model's Table, so every operation is exactly
one SQL statement and rows come back as plain dicts in column order. A
write that matches no row raises NotFoundError; the session is left for
the caller's unit of work to commit or roll back.

Example: BookRepository extending BaseRepository.
"""

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ConflictError, NotFoundError, ValidationError
from core.models.base import Base

logger = logging.getLogger(__name__)

# Range of a 4-byte INTEGER column, the narrowest the supported stores use
INT_MIN = -2_147_483_648
INT_MAX = 2_147_483_647

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async repository keyed by a natural primary key.

    Subclass and set `model` and `key` to your SQLAlchemy model::

        class BookRepository(BaseRepository[Book]):
            model = Book
            key = "isbn"

            async def find_by_author(self, author: str) -> list[dict]:
                return await self.find_all({"author": author})
    """

    model: type[ModelT]
    key: str

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def table(self) -> Table:
        return self.model.__table__

    @property
    def entity(self) -> str:
        return self.model.__name__.lower()

    def _coerce_filters(self, filters: dict[str, Any]) -> dict[str, Any]:
        """Keep filters naming real columns, cast to each column's type."""
        coerced = {}
        errors = []
        for name, value in filters.items():
            if name not in self.table.c or value is None:
                continue
            python_type = self.table.c[name].type.python_type
            try:
                cast = python_type(value)
            except (TypeError, ValueError):
                errors.append(f'filter "{name}" is not of a type(s) {python_type.__name__}')
                continue
            if python_type is int and not INT_MIN <= cast <= INT_MAX:
                errors.append(f'filter "{name}" is out of range')
                continue
            coerced[name] = cast
        if errors:
            raise ValidationError(errors)
        return coerced

    # -- List with filters --

    async def find_all(self, filters: dict[str, Any] | None = None) -> list[dict]:
        """All rows equal to every given filter (AND), or all rows."""
        stmt = select(self.table)
        for col_name, value in self._coerce_filters(filters or {}).items():
            stmt = stmt.where(self.table.c[col_name] == value)

        result = await self.session.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    # -- Get by key --

    async def find_one(self, key_value: str) -> dict:
        """Get a single row by key. Raises NotFoundError if absent."""
        stmt = select(self.table).where(self.table.c[self.key] == key_value)
        result = await self.session.execute(stmt)
        row = result.mappings().one_or_none()
        if row is None:
            raise NotFoundError(key_value, self.entity, self.key)
        return dict(row)

    # -- Create --

    async def create(self, data: dict[str, Any]) -> dict:
        """Insert a new row and return it as stored.

        Raises ConflictError when the key (or any other unique constraint)
        is already taken.
        """
        stmt = insert(self.table).values(**data).returning(*self.table.c)
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            logger.warning("Rejected duplicate %s %s=%r", self.entity, self.key, data.get(self.key))
            raise ConflictError(data.get(self.key), self.entity, self.key) from exc

        row = dict(result.mappings().one())
        logger.info("Created %s %s=%r", self.entity, self.key, row[self.key])
        return row

    # -- Update --

    async def update(self, key_value: str, data: dict[str, Any]) -> dict:
        """Overwrite the given columns of one row. Raises NotFoundError if absent."""
        stmt = (
            update(self.table)
            .where(self.table.c[self.key] == key_value)
            .values(**data)
            .returning(*self.table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().one_or_none()
        if row is None:
            raise NotFoundError(key_value, self.entity, self.key)

        logger.info("Updated %s %s=%r", self.entity, self.key, key_value)
        return dict(row)

    # -- Delete --

    async def remove(self, key_value: str) -> None:
        """Delete one row. Raises NotFoundError if absent."""
        stmt = delete(self.table).where(self.table.c[self.key] == key_value)
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError(key_value, self.entity, self.key)

        logger.info("Deleted %s %s=%r", self.entity, self.key, key_value)
