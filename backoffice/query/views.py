"""Declarative description of every filterable admin list view.

A view names its base model, the relation tree embedded in each row, and a
table mapping request parameters to column paths. Paths are dotted:
``column`` lives on the base model, ``relation.column`` on an embedded
relation and ``relation.child.column`` one level deeper. Relation names are
the ORM relationship attributes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from backoffice.models import (
    Account,
    Base,
    TaxType,
    UserAsset,
    UserBusiness,
    UserInvestment,
)

from .filters import (
    FilterKind,
    parse_bool,
    parse_decimal,
    parse_int,
    parse_iso_date,
    parse_text,
)
from .paging import SortDirection


class UnknownViewError(LookupError):
    """Raised when a caller asks for a view that is not declared."""


@dataclass(frozen=True)
class FieldFilter:
    """Maps one request parameter (or a Min/Max pair) to a column path."""

    param: str
    path: str
    kind: FilterKind
    parser: Callable[[Any], Any]
    suffixes: tuple[str, str] = ("Min", "Max")

    @property
    def relation(self) -> str | None:
        return relation_of(self.path)

    @property
    def range_params(self) -> tuple[str, str]:
        low, high = self.suffixes
        return f"{self.param}{low}", f"{self.param}{high}"


def equality(param: str, path: str, parser: Callable[[Any], Any] = parse_int) -> FieldFilter:
    return FieldFilter(param=param, path=path, kind=FilterKind.EQUALITY, parser=parser)


def contains(param: str, path: str) -> FieldFilter:
    return FieldFilter(param=param, path=path, kind=FilterKind.SUBSTRING, parser=parse_text)


def value_range(
    param: str,
    path: str,
    *,
    parser: Callable[[Any], Any] = parse_decimal,
    suffixes: tuple[str, str] = ("Min", "Max"),
) -> FieldFilter:
    return FieldFilter(param=param, path=path, kind=FilterKind.RANGE, parser=parser, suffixes=suffixes)


def date_range(param: str, path: str) -> FieldFilter:
    return FieldFilter(
        param=param,
        path=path,
        kind=FilterKind.RANGE,
        parser=parse_iso_date,
        suffixes=("From", "To"),
    )


def relation_of(path: str) -> str | None:
    """Return the relation path that owns ``path``'s column, if any."""

    relation, _, _ = path.rpartition(".")
    return relation or None


def child_relations(relations: tuple[str, ...], parent: str | None) -> tuple[str, ...]:
    """Direct children of ``parent`` (``None`` for the base model) in ``relations``."""

    return tuple(rel for rel in relations if relation_of(rel) == parent)


@dataclass(frozen=True)
class EntityView:
    name: str
    model: type[Base]
    primary_key: str
    search_columns: tuple[str, ...]
    relations: tuple[str, ...]
    sort_columns: tuple[str, ...]
    default_sort: str
    default_order: SortDirection
    filters: tuple[FieldFilter, ...]

    def __post_init__(self) -> None:
        # Parents must be declared before children so joins can be chained.
        seen: set[str] = set()
        for relation in self.relations:
            parent = relation_of(relation)
            if parent is not None and parent not in seen:
                raise ValueError(f"{self.name}: relation {relation!r} declared before {parent!r}")
            seen.add(relation)
        if self.default_sort not in self.sort_columns:
            raise ValueError(f"{self.name}: default sort {self.default_sort!r} is not whitelisted")

    def filter_for(self, param: str) -> FieldFilter:
        for field_filter in self.filters:
            if field_filter.param == param:
                return field_filter
        raise KeyError(param)


ACCOUNT_VIEW = EntityView(
    name="accounts",
    model=Account,
    primary_key="account_id",
    search_columns=("account_uname", "account_email", "account_fname", "account_lname"),
    relations=("account_type",),
    sort_columns=(
        "account_id",
        "account_uname",
        "account_status",
        "account_total_clicks",
        "account_investment_total_earnings",
        "account_business_total_earnings",
        "account_clicker_total_earnings",
        "created_at",
    ),
    default_sort="account_id",
    default_order=SortDirection.DESC,
    filters=(
        equality("type", "type_id"),
        equality("status", "account_status"),
        value_range("clicks", "account_total_clicks", parser=parse_int),
        value_range("investEarnings", "account_investment_total_earnings"),
        value_range("bizEarnings", "account_business_total_earnings"),
        value_range("clickerEarnings", "account_clicker_total_earnings"),
    ),
)

BUSINESS_VIEW = EntityView(
    name="businesses",
    model=UserBusiness,
    primary_key="user_business_id",
    search_columns=("user_business_name",),
    relations=(
        "account",
        "type_detail",
        "type_detail.business_type",
        "type_detail.business_category",
    ),
    sort_columns=(
        "user_business_id",
        "user_business_worth",
        "user_business_monthly_income",
        "user_business_earnings",
        "user_business_monthly_tax",
        "user_business_monthly_maintenance",
        "user_business_current_level",
        "last_tax_collection",
        "last_maintenance_collection",
    ),
    default_sort="user_business_worth",
    default_order=SortDirection.DESC,
    filters=(
        equality("type", "type_detail.business_type_id"),
        equality("category", "type_detail.business_category_id"),
        equality("status", "user_business_status"),
        value_range("worth", "user_business_worth"),
        value_range("income", "user_business_monthly_income"),
        value_range("earnings", "user_business_earnings"),
        date_range("lastTaxCollection", "last_tax_collection"),
        date_range("lastMaintenanceCollection", "last_maintenance_collection"),
    ),
)

INVESTMENT_VIEW = EntityView(
    name="investments",
    model=UserInvestment,
    primary_key="user_investment_id",
    search_columns=("account.account_uname",),
    relations=(
        "account",
        "type_detail",
        "type_detail.investment_type",
        "type_detail.investment_category",
    ),
    sort_columns=(
        "user_investment_id",
        "user_investment_units",
        "user_investment_total_earnings",
        "user_investment_issued",
    ),
    default_sort="user_investment_id",
    default_order=SortDirection.DESC,
    filters=(
        equality("type", "type_detail.investment_type_id"),
        equality("category", "type_detail.investment_category_id"),
        equality("status", "type_detail.investment_type.investment_type_status"),
        contains("focus", "type_detail.investment_category.investment_category_focus"),
        value_range(
            "price",
            "type_detail.investment_type.investment_type_price_per_unit",
            suffixes=("From", "To"),
        ),
        value_range(
            "capitalization",
            "type_detail.investment_type.investment_type_capitalization",
            suffixes=("From", "To"),
        ),
    ),
)

TAX_VIEW = EntityView(
    name="taxes",
    model=TaxType,
    primary_key="tax_type_id",
    search_columns=("tax_name",),
    relations=(),
    sort_columns=("tax_type_id", "tax_name", "tax_rate", "is_auto"),
    default_sort="tax_type_id",
    default_order=SortDirection.ASC,
    filters=(
        equality("isAuto", "is_auto", parser=parse_bool),
        value_range("rate", "tax_rate", suffixes=("From", "To")),
    ),
)

ASSET_VIEW = EntityView(
    name="assets",
    model=UserAsset,
    primary_key="user_asset_id",
    search_columns=("user_asset_custom_name",),
    relations=(
        "account",
        "asset",
        "asset.tax_type",
        "asset.asset_type",
        "asset.asset_type.asset_category",
    ),
    sort_columns=(
        "user_asset_id",
        "created_at",
        "user_asset_custom_name",
        "user_asset_monthly_tax",
        "user_asset_monthly_maintenance",
        "user_asset_market_value",
    ),
    default_sort="user_asset_id",
    default_order=SortDirection.DESC,
    filters=(
        equality("type", "asset.asset_type_id"),
        equality("category", "asset.asset_type.asset_category_id"),
        date_range("lastTaxCollection", "last_tax_collection"),
        date_range("lastMaintenancePaid", "last_maintenance_paid"),
    ),
)

VIEWS: dict[str, EntityView] = {
    view.name: view
    for view in (ACCOUNT_VIEW, BUSINESS_VIEW, INVESTMENT_VIEW, TAX_VIEW, ASSET_VIEW)
}


def get_view(name: str) -> EntityView:
    try:
        return VIEWS[name]
    except KeyError:
        raise UnknownViewError(f"Unknown list view: {name}") from None
