"""Books vertical — validated CRUD over a single table keyed by ISBN.

Puts the reusable patterns together in one domain:
- SQLAlchemy model declaring the books table
- Pure-function rule tables gating create and update payloads
- Async repository (the Book Store) with equality filters
- FastAPI router mapping store outcomes to HTTP
- Dataclass configuration
"""
