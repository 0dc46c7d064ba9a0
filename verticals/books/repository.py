"""Book repository — the Book Store.

Extends BaseRepository with the books table keyed by ISBN. Writes take the
typed inputs from verticals.books.models.schemas: BookCreate carries the
isbn, BookUpdate has no isbn field, so an update can never touch the key.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from patterns.repository import BaseRepository
from verticals.books.models.db_models import Book
from verticals.books.models.schemas import BookCreate, BookUpdate


# ---------------------------------------------------------------------------
# Book repository
# ---------------------------------------------------------------------------

class BookRepository(BaseRepository[Book]):
    """Repository for book CRUD with equality filters."""

    model = Book
    key = "isbn"

    async def create(self, data: BookCreate) -> dict:
        return await super().create(data.model_dump())

    async def update(self, isbn: str, data: BookUpdate) -> dict:
        """Replace every non-key column of the book with this isbn."""
        return await super().update(isbn, data.model_dump())


# ---------------------------------------------------------------------------
# FastAPI dependency factories
# ---------------------------------------------------------------------------

def get_book_repository(
    session: AsyncSession = Depends(get_session, scope="function"),
) -> BookRepository:
    """FastAPI dependency for BookRepository."""
    return BookRepository(session)
