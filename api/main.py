"""Books API — FastAPI entry point.

Registers middleware, error handlers, routers, and lifecycle hooks. The
store handle (core.database.Database) is acquired in the lifespan, kept on
app.state, and released at shutdown.

Run with::

    uvicorn api.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_error_handlers
from api.middleware import RequestLoggingMiddleware
from core.database import Database
from core.observability.log_setup import configure_logging
from patterns.domain_config import BooksConfig
from verticals.books.config import config as default_config
from verticals.books.router import router as books_router
from verticals.books.rules import build_schemas

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(config: BooksConfig | None = None) -> FastAPI:
    """Build the application for one configuration (env by default)."""
    config = config or default_config
    configure_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application startup/shutdown hooks."""
        database = Database(config.database)
        await database.init()
        app.state.database = database
        logger.info("Books API started (version %s)", config.version)
        try:
            yield
        finally:
            logger.info("Books API shutting down")
            await database.close()

    app = FastAPI(
        title="Books API",
        description="Validated CRUD for book records keyed by ISBN",
        version=config.version,
        debug=config.debug,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.book_schemas = build_schemas(config.validation)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request id + access log
    app.add_middleware(RequestLoggingMiddleware)

    register_error_handlers(app)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------

    app.include_router(books_router, prefix="/books", tags=["Books"])

    # -----------------------------------------------------------------------
    # Health & root
    # -----------------------------------------------------------------------

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": config.version}

    @app.get("/")
    async def root():
        return {
            "name": "Books API",
            "version": config.version,
            "docs": "/docs",
            "resources": ["books"],
        }

    return app


app = create_app()
