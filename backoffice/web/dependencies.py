"""Shared FastAPI dependency definitions."""
from __future__ import annotations

from collections.abc import AsyncIterator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backoffice.db.session import get_sessionmaker
from backoffice.services.admin_dashboard import AdminDashboardService
from backoffice.services.admin_listing import AdminListingService


@lru_cache(maxsize=1)
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory, creating the engine lazily."""

    return get_sessionmaker()


async def get_db_session(
    factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AsyncIterator[AsyncSession]:
    """Yield a database session suitable for request-scoped usage."""

    async with factory() as session:
        yield session


def get_listing_service(
    session: AsyncSession = Depends(get_db_session),
) -> AdminListingService:
    return AdminListingService(session)


def get_dashboard_service(
    factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AdminDashboardService:
    return AdminDashboardService(factory)
