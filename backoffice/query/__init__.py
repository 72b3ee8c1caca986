"""Filter-and-query composition for the admin list views."""

from .builder import ComposedQuery, StatementBuilder, compose
from .filters import Bounds, FilterSpec, normalize_filters
from .joins import JoinMode, JoinPlan, resolve_join_plan
from .paging import RowWindow, SortDirection, SortOrder, guard_sort, row_window, total_pages
from .predicates import LooseRelationError, Operator, Predicate, compose_predicates
from .views import VIEWS, EntityView, UnknownViewError, child_relations, get_view

__all__ = [
    "Bounds",
    "ComposedQuery",
    "EntityView",
    "FilterSpec",
    "JoinMode",
    "JoinPlan",
    "LooseRelationError",
    "Operator",
    "Predicate",
    "RowWindow",
    "SortDirection",
    "SortOrder",
    "StatementBuilder",
    "UnknownViewError",
    "VIEWS",
    "child_relations",
    "compose",
    "compose_predicates",
    "get_view",
    "guard_sort",
    "normalize_filters",
    "resolve_join_plan",
    "row_window",
    "total_pages",
]
