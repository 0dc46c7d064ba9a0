"""Pydantic schemas for typed store inputs and API responses.

Request bodies are checked by the rule tables in verticals.books.rules
first, and value bounds live only there. These models are the typed shape
handed to the repository once a payload has passed. BookUpdate has no isbn
field at all: the key only ever arrives through the URL path.
"""

from pydantic import BaseModel, ConfigDict


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class BookUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    amazon_url: str
    author: str
    language: str
    pages: int
    publisher: str
    title: str
    year: int


class BookCreate(BookUpdate):
    isbn: str


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class BookResponse(BaseModel):
    isbn: str
    amazon_url: str
    author: str
    language: str
    pages: int
    publisher: str
    title: str
    year: int


class BookEnvelope(BaseModel):
    book: BookResponse


class BookListEnvelope(BaseModel):
    books: list[BookResponse]


class MessageResponse(BaseModel):
    message: str
