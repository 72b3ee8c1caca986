"""Turn a ``FilterSpec`` into the ordered predicate list for a view."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .filters import FilterSpec
from .joins import JoinPlan
from .views import EntityView, relation_of


class Operator(str, Enum):
    NOT_EQUAL = "neq"
    EQUAL = "eq"
    CONTAINS = "ilike"
    GREATER_EQUAL = "gte"
    LESS_EQUAL = "lte"
    ANY_CONTAINS = "or_ilike"


class LooseRelationError(RuntimeError):
    """A predicate tried to address a column on a loosely joined relation."""


@dataclass(frozen=True)
class Predicate:
    """One conjunctive clause.

    ``paths`` holds a single column path except for ``ANY_CONTAINS``, whose
    paths are OR-ed together.
    """

    operator: Operator
    paths: tuple[str, ...]
    value: Any

    @property
    def path(self) -> str:
        return self.paths[0]


def _checked(plan: JoinPlan, *paths: str) -> tuple[str, ...]:
    for path in paths:
        relation = relation_of(path)
        if relation is not None and not plan.is_strict(relation):
            raise LooseRelationError(f"{path!r} addresses loosely joined relation {relation!r}")
    return paths


def compose_predicates(view: EntityView, spec: FilterSpec, plan: JoinPlan) -> list[Predicate]:
    """Return predicates in a fixed order.

    Exclusion first, then equality, substring and range filters in the view's
    declaration order, then the free-text OR-group over the search columns.
    """

    predicates: list[Predicate] = []

    if spec.exclude_id is not None:
        predicates.append(
            Predicate(Operator.NOT_EQUAL, _checked(plan, view.primary_key), spec.exclude_id)
        )

    for field_filter in view.filters:
        if field_filter.param in spec.equality:
            predicates.append(
                Predicate(
                    Operator.EQUAL,
                    _checked(plan, field_filter.path),
                    spec.equality[field_filter.param],
                )
            )

    for field_filter in view.filters:
        if field_filter.param in spec.substring:
            predicates.append(
                Predicate(
                    Operator.CONTAINS,
                    _checked(plan, field_filter.path),
                    spec.substring[field_filter.param],
                )
            )

    for field_filter in view.filters:
        bounds = spec.ranges.get(field_filter.param)
        if bounds is None:
            continue
        paths = _checked(plan, field_filter.path)
        if bounds.lower is not None:
            predicates.append(Predicate(Operator.GREATER_EQUAL, paths, bounds.lower))
        if bounds.upper is not None:
            predicates.append(Predicate(Operator.LESS_EQUAL, paths, bounds.upper))

    if spec.query:
        predicates.append(
            Predicate(Operator.ANY_CONTAINS, _checked(plan, *view.search_columns), spec.query)
        )

    return predicates
