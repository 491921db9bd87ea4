"""SQLAlchemy declarative base and shared column types."""

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator
from sqlalchemy.dialects.postgresql import JSONB as PG_JSONB


class JSONB(TypeDecorator):
    """
    JSON document column.

    Native JSONB on PostgreSQL and the generic JSON type elsewhere, so the
    SQLite test database stores product images, notification metadata and
    audit values the same way. Python ``None`` is stored as SQL NULL.
    """
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PG_JSONB(none_as_null=True))
        return dialect.type_descriptor(JSON(none_as_null=True))


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass
