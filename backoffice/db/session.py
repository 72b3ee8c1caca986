"""Opinionated SQLAlchemy session helpers."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from .engine import create_engine


def get_sessionmaker(
    url: str | None = None,
    *,
    engine: AsyncEngine | None = None,
    **kwargs,
) -> async_sessionmaker[AsyncSession]:
    """Return an ``async_sessionmaker`` bound to a shared engine.

    Sessions keep loaded attributes after commit so that serialised rows stay
    readable once the request's session is closed.
    """

    bound = engine or create_engine(url, **kwargs)
    return async_sessionmaker(bind=bound, autoflush=False, expire_on_commit=False)
