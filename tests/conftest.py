"""Shared fixtures: an app on a per-test SQLite file and an httpx client."""
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from api.main import create_app
from patterns.domain_config import BooksConfig, DatabaseConfig
from verticals.books.models.schemas import BookCreate
from verticals.books.repository import BookRepository

BOOK = {
    "isbn": "0691161518",
    "amazon_url": "http://a.co/eobPtX2",
    "author": "Matthew Lane",
    "language": "english",
    "pages": 264,
    "publisher": "Princeton University Press",
    "title": "Power-Up: Unlocking the Hidden Mathematics in Video Games",
    "year": 2017,
}


def without_isbn(book: dict) -> dict:
    return {k: v for k, v in book.items() if k != "isbn"}


@pytest.fixture
def config(tmp_path):
    return BooksConfig(
        database=DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'books.db'}"),
    )


@pytest_asyncio.fixture
async def app(config):
    app = create_app(config)
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def database(app):
    return app.state.database


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def stored_book(database):
    async with database.session() as session:
        await BookRepository(session).create(BookCreate(**BOOK))
    return dict(BOOK)


async def fetch_books(database) -> list[dict]:
    async with database.session() as session:
        return await BookRepository(session).find_all()


@asynccontextmanager
async def serve(config: BooksConfig):
    """Run an app built for `config` and yield a client bound to it."""
    app = create_app(config)
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
