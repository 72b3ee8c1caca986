"""Shared fixtures: a throwaway SQLite database reached through aiosqlite."""
from __future__ import annotations

import os

# Keep test runs from writing daily log files into the working tree.
os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("AUTH_ENABLED", "1")

from collections.abc import AsyncIterator  # noqa: E402
from pathlib import Path  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402

from backoffice.db import create_engine, get_sessionmaker  # noqa: E402
from backoffice.models import Base  # noqa: E402


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    database = tmp_path / "backoffice.sqlite3"
    async_engine = create_engine(f"sqlite+aiosqlite:///{database}", echo=False)
    async with async_engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    yield async_engine
    await async_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return get_sessionmaker(engine=engine)


@pytest.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as db_session:
        yield db_session
