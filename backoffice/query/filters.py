"""Normalisation of raw list-view parameters into a ``FilterSpec``.

Everything here is fail-safe: a malformed value degrades to "no constraint"
or to the documented default instead of failing the request, so the admin
screens keep rendering a list even when the URL has been mangled.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from .views import EntityView

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
ALL_SENTINEL = "all"

# Largest value a BIGINT bind parameter (and an OFFSET) can carry.
MAX_SQL_INT = 2**63 - 1


class FilterKind(str, Enum):
    EQUALITY = "equality"
    SUBSTRING = "substring"
    RANGE = "range"


def parse_positive_int(value: object, *, default: int) -> int:
    """Parse a positive integer, falling back to ``default``."""

    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return parsed if 0 < parsed <= MAX_SQL_INT else default


def parse_iso_date(value: object) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text_value = str(value).strip()
    if len(text_value) > 10 and text_value[10] in "T ":
        text_value = text_value[:10]
    return date.fromisoformat(text_value)


def parse_int(value: object) -> int:
    if isinstance(value, bool):
        raise ValueError("boolean is not an integer filter value")
    parsed = value if isinstance(value, int) else int(str(value).strip())
    if abs(parsed) > MAX_SQL_INT:
        raise ValueError(f"integer out of range: {value!r}")
    return parsed


def parse_decimal(value: object) -> Decimal:
    if isinstance(value, bool):
        raise ValueError("boolean is not a numeric filter value")
    if isinstance(value, Decimal):
        return value
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"not a number: {value!r}") from exc
    if not parsed.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return parsed


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in {"true", "1", "yes"}:
        return True
    if lowered in {"false", "0", "no"}:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def parse_text(value: object) -> str:
    text_value = str(value).strip()
    if not text_value:
        raise ValueError("empty text")
    return text_value


def is_unset(value: object) -> bool:
    """``None``, blank strings and the ``"all"`` sentinel mean no constraint."""

    if value is None:
        return True
    if isinstance(value, str):
        stripped = value.strip()
        return not stripped or stripped.lower() == ALL_SENTINEL
    return False


@dataclass(frozen=True)
class Bounds:
    """Inclusive range; either side may be missing."""

    lower: Any = None
    upper: Any = None

    @property
    def is_empty(self) -> bool:
        return self.lower is None and self.upper is None


@dataclass(frozen=True)
class FilterSpec:
    """Canonical, per-request filter record for one entity view.

    ``equality``, ``substring`` and ``ranges`` are keyed by the view's
    parameter names; only constrained parameters are present.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    query: str | None = None
    sort_by: str | None = None
    sort_order: str | None = None
    exclude_id: int | None = None
    equality: Mapping[str, Any] = field(default_factory=dict)
    substring: Mapping[str, str] = field(default_factory=dict)
    ranges: Mapping[str, Bounds] = field(default_factory=dict)


def _coerced(parser, value: object) -> Any:
    if is_unset(value):
        return None
    try:
        return parser(value)
    except (TypeError, ValueError):
        return None


def normalize_filters(view: "EntityView", params: Mapping[str, Any] | None) -> FilterSpec:
    """Build the ``FilterSpec`` for ``view`` from a raw parameter bag.

    Unknown keys are ignored. ``sort_by``/``sort_order`` are defaulted here and
    whitelisted later by :func:`backoffice.query.paging.guard_sort`.
    """

    raw: Mapping[str, Any] = params or {}

    query_value = raw.get("query")
    query = str(query_value).strip() if query_value is not None else ""

    sort_by = raw.get("sortBy")
    sort_order = raw.get("sortOrder")

    equality: dict[str, Any] = {}
    substring: dict[str, str] = {}
    ranges: dict[str, Bounds] = {}

    for field_filter in view.filters:
        if field_filter.kind is FilterKind.RANGE:
            low_key, high_key = field_filter.range_params
            bounds = Bounds(
                lower=_coerced(field_filter.parser, raw.get(low_key)),
                upper=_coerced(field_filter.parser, raw.get(high_key)),
            )
            if not bounds.is_empty:
                ranges[field_filter.param] = bounds
            continue

        value = _coerced(field_filter.parser, raw.get(field_filter.param))
        if value is None:
            continue
        if field_filter.kind is FilterKind.SUBSTRING:
            substring[field_filter.param] = str(value)
        else:
            equality[field_filter.param] = value

    page = parse_positive_int(raw.get("page"), default=DEFAULT_PAGE)
    limit = parse_positive_int(raw.get("limit"), default=DEFAULT_LIMIT)
    if (page - 1) * limit > MAX_SQL_INT:
        page = DEFAULT_PAGE

    return FilterSpec(
        page=page,
        limit=limit,
        query=query or None,
        sort_by=sort_by if isinstance(sort_by, str) and sort_by else view.default_sort,
        sort_order=(
            sort_order
            if isinstance(sort_order, str) and sort_order
            else view.default_order.value
        ),
        exclude_id=_coerced(parse_int, raw.get("excludeId")),
        equality=equality,
        substring=substring,
        ranges=ranges,
    )
