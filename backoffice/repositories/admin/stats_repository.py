"""Row counts backing the dashboard growth statistics."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import InstrumentedAttribute

from backoffice.models import Account, Base

from .base import BaseAdminRepository


class AdminStatsRepository(BaseAdminRepository):
    """Counts for one category table, total and before a cutoff."""

    async def count_total(self, model: type[Base]) -> int:
        return await self._scalar(select(func.count()).select_from(model))

    async def count_before(
        self,
        model: type[Base],
        column: InstrumentedAttribute[Any],
        cutoff: datetime,
    ) -> int:
        """Rows whose ``column`` is strictly earlier than ``cutoff``."""

        statement = select(func.count()).select_from(model).where(column < cutoff)
        return await self._scalar(statement)

    async def display_name(self, account_id: int) -> tuple[str | None, str | None] | None:
        """First and last name of the account ``account_id``, if it exists."""

        record = await self._session.get(Account, account_id)
        if record is None:
            return None
        return record.account_fname, record.account_lname
