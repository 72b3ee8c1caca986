"""Compile a composed list request into SQLAlchemy statements."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import aliased, contains_eager
from sqlalchemy.sql.elements import ColumnElement

from .filters import FilterSpec, normalize_filters
from .joins import JoinPlan, resolve_join_plan
from .paging import RowWindow, SortOrder, guard_sort, row_window
from .predicates import Operator, Predicate, compose_predicates
from .views import EntityView, relation_of

LIKE_ESCAPE = "\\"


def contains_pattern(value: str) -> str:
    """Wrap ``value`` for a substring LIKE, escaping its wildcards."""

    escaped = (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


@dataclass(frozen=True)
class ComposedQuery:
    """Everything decided about one list request before touching the store."""

    view: EntityView
    spec: FilterSpec
    plan: JoinPlan
    predicates: tuple[Predicate, ...]
    sort: SortOrder
    window: RowWindow


def compose(view: EntityView, params: Mapping[str, Any] | None) -> ComposedQuery:
    """Run normalisation, join resolution, predicate composition and paging."""

    spec = normalize_filters(view, params)
    plan = resolve_join_plan(view, spec)
    return ComposedQuery(
        view=view,
        spec=spec,
        plan=plan,
        predicates=tuple(compose_predicates(view, spec, plan)),
        sort=guard_sort(view, spec.sort_by, spec.sort_order),
        window=row_window(spec.page, spec.limit),
    )


class StatementBuilder:
    """Translate a ``ComposedQuery`` into a row statement and a count statement.

    Each relation is joined through its own alias so the same table can appear
    twice in one view. Strict relations become inner joins, loose ones outer
    joins; either way the related rows are loaded into the ORM objects with
    ``contains_eager``.
    """

    def __init__(self, composed: ComposedQuery) -> None:
        self._composed = composed
        self._view = composed.view
        self._aliases: dict[str, Any] = {}
        for relation in self._view.relations:
            parent = self._entity(relation_of(relation))
            attribute = relation.rpartition(".")[2]
            target = getattr(parent, attribute).property.mapper.class_
            self._aliases[relation] = aliased(target, name=relation.replace(".", "__"))

    def _entity(self, relation: str | None) -> Any:
        if relation is None:
            return self._view.model
        return self._aliases[relation]

    def _relationship(self, relation: str) -> Any:
        parent = self._entity(relation_of(relation))
        attribute = relation.rpartition(".")[2]
        return getattr(parent, attribute).of_type(self._aliases[relation])

    def column(self, path: str) -> ColumnElement[Any]:
        relation = relation_of(path)
        return getattr(self._entity(relation), path.rpartition(".")[2])

    def clause(self, predicate: Predicate) -> ColumnElement[bool]:
        operator = predicate.operator
        if operator is Operator.ANY_CONTAINS:
            pattern = contains_pattern(str(predicate.value))
            return or_(
                *(self.column(path).ilike(pattern, escape=LIKE_ESCAPE) for path in predicate.paths)
            )

        column = self.column(predicate.path)
        if operator is Operator.NOT_EQUAL:
            return column != predicate.value
        if operator is Operator.EQUAL:
            return column == predicate.value
        if operator is Operator.CONTAINS:
            return column.ilike(contains_pattern(str(predicate.value)), escape=LIKE_ESCAPE)
        if operator is Operator.GREATER_EQUAL:
            return column >= predicate.value
        if operator is Operator.LESS_EQUAL:
            return column <= predicate.value
        raise ValueError(f"Unsupported operator: {operator}")

    def filtered(self) -> Select[Any]:
        """Base select with joins and WHERE clauses, no ordering or window."""

        statement = select(self._view.model)
        for relation in self._view.relations:
            statement = statement.join(
                self._relationship(relation),
                isouter=not self._composed.plan.is_strict(relation),
            )
        for predicate in self._composed.predicates:
            statement = statement.where(self.clause(predicate))
        return statement

    def _eager_options(self) -> list[Any]:
        options: list[Any] = []
        for relation in self._view.relations:
            chain: list[str] = []
            current: str | None = relation
            while current:
                chain.insert(0, current)
                current = relation_of(current)
            loader = contains_eager(self._relationship(chain[0]))
            for step in chain[1:]:
                loader = loader.contains_eager(self._relationship(step))
            options.append(loader)
        return options

    def rows(self) -> Select[Any]:
        sort = self._composed.sort
        window = self._composed.window
        sort_column = self.column(sort.column)
        key_column = self.column(self._view.primary_key)

        ordering = [sort_column.asc() if sort.ascending else sort_column.desc()]
        if sort.column != self._view.primary_key:
            ordering.append(key_column.asc() if sort.ascending else key_column.desc())

        return (
            self.filtered()
            .options(*self._eager_options())
            .order_by(*ordering)
            .offset(window.start)
            .limit(window.size)
        )

    def count(self) -> Select[Any]:
        return select(func.count()).select_from(self.filtered().subquery())
