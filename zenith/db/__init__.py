"""Database module - session management and base classes."""

from zenith.db.base import Base
from zenith.db.session import get_db, AsyncSessionLocal, engine

__all__ = ["Base", "get_db", "AsyncSessionLocal", "engine"]
