from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from backoffice.query.filters import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    Bounds,
    is_unset,
    normalize_filters,
    parse_bool,
    parse_iso_date,
    parse_positive_int,
)
from backoffice.query.views import ACCOUNT_VIEW, BUSINESS_VIEW, INVESTMENT_VIEW, TAX_VIEW


def test_defaults_for_empty_request() -> None:
    spec = normalize_filters(ACCOUNT_VIEW, None)

    assert spec.page == DEFAULT_PAGE
    assert spec.limit == DEFAULT_LIMIT
    assert spec.query is None
    assert spec.sort_by == "account_id"
    assert spec.sort_order == "desc"
    assert spec.exclude_id is None
    assert not spec.equality and not spec.substring and not spec.ranges


@pytest.mark.parametrize("raw", [None, "0", "-3", "abc", "", True])
def test_invalid_page_falls_back_to_default(raw: object) -> None:
    assert parse_positive_int(raw, default=7) == 7


@pytest.mark.parametrize(
    ("params", "page", "limit", "exclude_id"),
    [
        ({"page": "99999999999999999999"}, DEFAULT_PAGE, DEFAULT_LIMIT, None),
        ({"limit": str(2**63)}, DEFAULT_PAGE, DEFAULT_LIMIT, None),
        ({"page": str(2**62), "limit": "10"}, DEFAULT_PAGE, 10, None),
        ({"page": "3", "limit": str(2**63 - 1)}, DEFAULT_PAGE, 2**63 - 1, None),
        ({"page": "2", "limit": str(2**63 - 1)}, 2, 2**63 - 1, None),
        ({"excludeId": "99999999999999999999"}, DEFAULT_PAGE, DEFAULT_LIMIT, None),
        ({"excludeId": str(2**63 - 1)}, DEFAULT_PAGE, DEFAULT_LIMIT, 2**63 - 1),
    ],
)
def test_integers_beyond_bigint_range_are_invalid(
    params: dict[str, str], page: int, limit: int, exclude_id: int | None
) -> None:
    spec = normalize_filters(ACCOUNT_VIEW, params)

    assert spec.page == page
    assert spec.limit == limit
    assert spec.exclude_id == exclude_id


def test_out_of_range_integer_bound_is_unset() -> None:
    spec = normalize_filters(ACCOUNT_VIEW, {"clicksMin": "1" * 25, "clicksMax": "500"})

    assert spec.ranges == {"clicks": Bounds(lower=None, upper=500)}


def test_numeric_strings_are_parsed() -> None:
    spec = normalize_filters(ACCOUNT_VIEW, {"page": "3", "limit": "50", "status": "1"})

    assert spec.page == 3
    assert spec.limit == 50
    assert spec.equality == {"status": 1}


def test_all_sentinel_equals_absence() -> None:
    with_sentinel = normalize_filters(ACCOUNT_VIEW, {"type": "all", "status": "ALL"})
    without = normalize_filters(ACCOUNT_VIEW, {})

    assert with_sentinel == without
    assert is_unset("all") and is_unset("  ") and is_unset(None)
    assert not is_unset(0)


def test_ranges_are_independently_optional() -> None:
    only_min = normalize_filters(ACCOUNT_VIEW, {"clicksMin": "100"})
    neither = normalize_filters(ACCOUNT_VIEW, {"clicksMin": "", "clicksMax": None})

    assert only_min.ranges == {"clicks": Bounds(lower=100, upper=None)}
    assert neither.ranges == {}


def test_zero_is_a_real_bound() -> None:
    spec = normalize_filters(ACCOUNT_VIEW, {"bizEarningsMin": "0", "bizEarningsMax": "0"})

    assert spec.ranges["bizEarnings"] == Bounds(lower=Decimal("0"), upper=Decimal("0"))


def test_malformed_values_are_dropped() -> None:
    spec = normalize_filters(
        BUSINESS_VIEW,
        {
            "category": "three",
            "worthMin": "lots",
            "worthMax": "NaN",
            "lastTaxCollectionFrom": "2024-13-45",
            "lastTaxCollectionTo": "2024-06-30",
            "excludeId": "x",
        },
    )

    assert spec.equality == {}
    assert "worth" not in spec.ranges
    assert spec.ranges["lastTaxCollection"] == Bounds(lower=None, upper=date(2024, 6, 30))
    assert spec.exclude_id is None


def test_date_range_accepts_timestamps() -> None:
    assert parse_iso_date("2024-05-01T10:30:00Z") == date(2024, 5, 1)


def test_substring_filter_is_trimmed() -> None:
    spec = normalize_filters(INVESTMENT_VIEW, {"focus": "  Growth ", "query": "  "})

    assert spec.substring == {"focus": "Growth"}
    assert spec.query is None


def test_boolean_filter() -> None:
    assert normalize_filters(TAX_VIEW, {"isAuto": "true"}).equality == {"isAuto": True}
    assert normalize_filters(TAX_VIEW, {"isAuto": "false"}).equality == {"isAuto": False}
    assert normalize_filters(TAX_VIEW, {"isAuto": "maybe"}).equality == {}
    with pytest.raises(ValueError):
        parse_bool("maybe")


def test_unknown_keys_are_ignored() -> None:
    spec = normalize_filters(TAX_VIEW, {"clicksMin": "5", "status": "1"})

    assert spec.equality == {}
    assert spec.ranges == {}
