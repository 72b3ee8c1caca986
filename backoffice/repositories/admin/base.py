"""Shared helpers for admin repositories."""
from __future__ import annotations

from typing import Any

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from backoffice.models import Base


class BaseAdminRepository:
    """Base repository providing convenience helpers."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _scalar(self, statement: Executable, params: dict[str, Any] | None = None) -> int:
        """Execute ``statement`` and return the scalar integer result."""

        result = await self._session.execute(statement, params or {})
        value = result.scalar() or 0
        return int(value)

    @staticmethod
    def _columns(instance: Base) -> dict[str, Any]:
        """Column values of an ORM instance keyed by attribute name."""

        mapper = inspect(instance).mapper
        return {attr.key: getattr(instance, attr.key) for attr in mapper.column_attrs}
