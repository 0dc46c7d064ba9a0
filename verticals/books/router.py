"""Books API router — validated CRUD keyed by ISBN.

Demonstrates the standard router pattern:
- Raw JSON bodies gated by the rule tables in verticals.books.rules
- Typed inputs (BookCreate / BookUpdate) handed to the repository
- Repository injection via FastAPI Depends
- Errors raised as core.errors types and mapped to HTTP in api.errors
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from core.errors import ValidationError
from verticals.books.models.schemas import (
    BookCreate,
    BookEnvelope,
    BookListEnvelope,
    BookUpdate,
    MessageResponse,
)
from verticals.books.repository import BookRepository, get_book_repository
from verticals.books.rules import SCHEMAS, Schemas, validate

router = APIRouter()


def get_book_schemas(request: Request) -> Schemas:
    """FastAPI dependency: the rule tables the running app was built with."""
    return getattr(request.app.state, "book_schemas", SCHEMAS)


def _checked(payload: Any, schema_name: str, schemas: Schemas) -> Any:
    result = validate(payload, schema_name, schemas)
    if not result.valid:
        raise ValidationError(result.errors)
    return payload


# ============================================================================
# Book Endpoints
# ============================================================================

@router.get("", response_model=BookListEnvelope)
async def list_books(
    request: Request,
    repo: BookRepository = Depends(get_book_repository, scope="function"),
):
    """List books, optionally filtered by equality on any column."""
    books = await repo.find_all(dict(request.query_params))
    return {"books": books}


@router.get("/{isbn}", response_model=BookEnvelope)
async def get_book(
    isbn: str,
    repo: BookRepository = Depends(get_book_repository, scope="function"),
):
    """Get a single book."""
    book = await repo.find_one(isbn)
    return {"book": book}


@router.post("", response_model=BookEnvelope, status_code=201)
async def create_book(
    payload: Any = Body(None),
    schemas: Schemas = Depends(get_book_schemas),
    repo: BookRepository = Depends(get_book_repository, scope="function"),
):
    """Add a new book to the catalog."""
    data = BookCreate.model_validate(_checked(payload, "create", schemas))
    book = await repo.create(data)
    return {"book": book}


@router.put("/{isbn}", response_model=BookEnvelope)
async def update_book(
    isbn: str,
    payload: Any = Body(None),
    schemas: Schemas = Depends(get_book_schemas),
    repo: BookRepository = Depends(get_book_repository, scope="function"),
):
    """Replace every field of a book except its isbn."""
    data = BookUpdate.model_validate(_checked(payload, "update", schemas))
    book = await repo.update(isbn, data)
    return {"book": book}


@router.delete("/{isbn}", response_model=MessageResponse)
async def delete_book(
    isbn: str,
    repo: BookRepository = Depends(get_book_repository, scope="function"),
):
    """Remove a book from the catalog."""
    await repo.remove(isbn)
    return {"message": "Book deleted"}
