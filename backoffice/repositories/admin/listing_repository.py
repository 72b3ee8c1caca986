"""Data access for the filtered admin list views and catalogue lookups."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import InstrumentedAttribute, selectinload

from backoffice.core.log import get_logger, timeit
from backoffice.models import Base
from backoffice.query import ComposedQuery, EntityView, StatementBuilder, child_relations

from .base import BaseAdminRepository

LOGGER = get_logger(__name__)


def _eager_paths(model: type[Base], relations: tuple[str, ...]) -> list[Any]:
    options = []
    for relation in relations:
        owner, loader = model, None
        for name in relation.split("."):
            attribute = getattr(owner, name)
            loader = selectinload(attribute) if loader is None else loader.selectinload(attribute)
            owner = attribute.property.mapper.class_
        options.append(loader)
    return options


@dataclass(frozen=True)
class QueryResult:
    rows: list[dict[str, Any]]
    total_count: int | None


class AdminListingRepository(BaseAdminRepository):
    """Executes composed list queries and simple catalogue reads."""

    async def fetch_page(self, composed: ComposedQuery) -> QueryResult:
        """Run the count and the windowed row query for ``composed``."""

        view = composed.view
        builder = StatementBuilder(composed)
        with timeit(f"{view.name} listing", logger=LOGGER, unit="rows") as timer:
            total = await self._scalar(builder.count())
            result = await self._session.execute(builder.rows())
            records = result.scalars().all()
            timer.set_total(len(records))
        return QueryResult(
            rows=[self.serialize(view, record) for record in records],
            total_count=total,
        )

    def serialize(self, view: EntityView, record: Base) -> dict[str, Any]:
        """Flatten ``record`` and embed the view's relation tree.

        A relation without a matching row (possible under a loose join) is
        embedded as ``None``.
        """

        return self._embed(record, view.relations)

    def _embed(
        self,
        record: Base,
        relations: tuple[str, ...],
        parent: str | None = None,
    ) -> dict[str, Any]:
        payload = self._columns(record)
        for relation in child_relations(relations, parent):
            name = relation.rpartition(".")[2]
            related = getattr(record, name)
            payload[name] = None if related is None else self._embed(related, relations, relation)
        return payload

    async def get_by_key(self, model: type[Base], key: int) -> dict[str, Any] | None:
        record = await self._session.get(model, key)
        if record is None:
            return None
        return self._columns(record)

    async def distinct_values(
        self,
        column: InstrumentedAttribute[Any],
        *,
        descending: bool = True,
    ) -> list[Any]:
        ordering = column.desc() if descending else column.asc()
        result = await self._session.execute(select(column).distinct().order_by(ordering))
        return list(result.scalars().all())

    async def list_all(
        self,
        model: type[Base],
        order_by: InstrumentedAttribute[Any],
        relations: tuple[str, ...] = (),
    ) -> list[dict[str, Any]]:
        """Every row of ``model`` with the many-to-one ``relations`` embedded."""

        statement = select(model).options(*_eager_paths(model, relations)).order_by(order_by.asc())
        result = await self._session.execute(statement)
        return [self._embed(record, relations) for record in result.scalars().all()]

    async def count_rows(self, model: type[Base]) -> int:
        return await self._scalar(select(func.count()).select_from(model))
