"""Per-request join strictness for a view's embedded relations."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Mapping

from .filters import FilterSpec
from .views import EntityView, relation_of


class JoinMode(str, Enum):
    STRICT = "strict"
    LOOSE = "loose"


@dataclass(frozen=True)
class JoinPlan:
    """Join mode for every relation declared by a view."""

    modes: Mapping[str, JoinMode]

    def mode(self, relation: str) -> JoinMode:
        return self.modes[relation]

    def is_strict(self, relation: str) -> bool:
        return self.modes.get(relation) is JoinMode.STRICT

    @property
    def strict_relations(self) -> frozenset[str]:
        return frozenset(rel for rel, mode in self.modes.items() if mode is JoinMode.STRICT)


def addressed_paths(view: EntityView, spec: FilterSpec) -> Iterator[str]:
    """Yield the column path of every constraint ``spec`` puts on ``view``."""

    for param in spec.equality:
        yield view.filter_for(param).path
    for param in spec.substring:
        yield view.filter_for(param).path
    for param in spec.ranges:
        yield view.filter_for(param).path
    if spec.query:
        yield from view.search_columns


def _ancestors(relation: str | None) -> Iterator[str]:
    while relation:
        yield relation
        relation = relation_of(relation)


def resolve_join_plan(view: EntityView, spec: FilterSpec) -> JoinPlan:
    """Mark a relation strict when a constraint addresses it or a descendant.

    Loose relations keep base rows whose related row is missing; a strict
    relation drops them. Plans are cheap and must be rebuilt for each request.
    """

    strict: set[str] = set()
    for path in addressed_paths(view, spec):
        strict.update(_ancestors(relation_of(path)))

    return JoinPlan(
        modes={
            relation: JoinMode.STRICT if relation in strict else JoinMode.LOOSE
            for relation in view.relations
        }
    )
