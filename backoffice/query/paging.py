"""Sort whitelisting and row-window arithmetic for list views."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from math import ceil
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .views import EntityView


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: object) -> "SortDirection | None":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class SortOrder:
    column: str
    direction: SortDirection

    @property
    def ascending(self) -> bool:
        return self.direction is SortDirection.ASC


@dataclass(frozen=True)
class RowWindow:
    """Inclusive, zero-based row range of one page."""

    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start + 1


def guard_sort(view: "EntityView", sort_by: object, sort_order: object) -> SortOrder:
    """Return a safe ordering for ``view``.

    Keys outside the view's whitelist resolve to its default column and
    unrecognised directions to its default direction. Nothing the caller sends
    ever reaches the ORDER BY clause unchecked.
    """

    column = sort_by if isinstance(sort_by, str) and sort_by in view.sort_columns else None
    direction = SortDirection.parse(sort_order) or view.default_order
    return SortOrder(column=column or view.default_sort, direction=direction)


def row_window(page: int, limit: int) -> RowWindow:
    start = (page - 1) * limit
    return RowWindow(start=start, end=start + limit - 1)


def total_pages(count: int | None, limit: int) -> int:
    if count is None:
        return 0
    return ceil(count / limit)
