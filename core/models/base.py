"""Base model for all SQLAlchemy models.

Provides:
- Base: Declarative base class for all models

Models only declare tables; repositories query the Table directly and hand
rows around as dicts (see patterns.repository).
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all books API models."""
    pass
