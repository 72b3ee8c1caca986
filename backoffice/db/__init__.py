"""Database helpers and SQLAlchemy session factories."""

from .engine import create_engine
from .session import get_sessionmaker

__all__ = [
    "create_engine",
    "get_sessionmaker",
]
