"""Service logic for the filtered admin list views and catalogue reads."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from backoffice.core.log import get_logger, log_context
from backoffice.models import (
    Account,
    AccountType,
    Asset,
    AssetCategory,
    AssetType,
    Base,
    BusinessCategory,
    BusinessType,
    BusinessTypeDetail,
    City,
    InvestmentCategory,
    InvestmentType,
    InvestmentTypeDetail,
    TaxType,
)
from backoffice.query import EntityView, UnknownViewError, compose, get_view
from backoffice.repositories.admin import AdminListingRepository
from backoffice.schemas.admin import CountPayload, ErrorEnvelope, SuccessEnvelope

from .envelope import STORE_ERRORS, fail, ok, page_meta, store_failure

LOGGER = get_logger(__name__)

Envelope = SuccessEnvelope[Any] | ErrorEnvelope


@dataclass(frozen=True)
class Lookup:
    """A catalogue table exposed read-only, ordered by primary key."""

    model: type[Base]
    order_by: InstrumentedAttribute[Any]
    relations: tuple[str, ...] = ()


LOOKUPS: dict[str, Lookup] = {
    "account-types": Lookup(AccountType, AccountType.type_id),
    "business-categories": Lookup(BusinessCategory, BusinessCategory.business_category_id),
    "business-types": Lookup(BusinessType, BusinessType.business_type_id, ("tax_type",)),
    "business-type-details": Lookup(
        BusinessTypeDetail,
        BusinessTypeDetail.business_type_detail_id,
        ("business_type", "business_category"),
    ),
    "investment-categories": Lookup(InvestmentCategory, InvestmentCategory.investment_category_id),
    "investment-types": Lookup(InvestmentType, InvestmentType.investment_type_id),
    "investment-type-details": Lookup(
        InvestmentTypeDetail,
        InvestmentTypeDetail.investment_type_detail_id,
        ("investment_type", "investment_category"),
    ),
    "asset-categories": Lookup(AssetCategory, AssetCategory.asset_category_id),
    "asset-types": Lookup(AssetType, AssetType.asset_type_id, ("asset_category",)),
    "assets": Lookup(Asset, Asset.asset_id, ("asset_type", "asset_type.asset_category")),
    "tax-types": Lookup(TaxType, TaxType.tax_type_id),
    "cities": Lookup(City, City.city_id),
}

ACCOUNT_NOT_FOUND = "Account not found"


class AdminListingService:
    """Facade over the list views used by the admin screens.

    Every public method returns an envelope; store failures are logged here
    and never raised to the caller.
    """

    def __init__(
        self,
        session: AsyncSession,
        repository: AdminListingRepository | None = None,
    ) -> None:
        self._repository = repository or AdminListingRepository(session)

    async def list_view(self, view: EntityView | str, params: Mapping[str, Any] | None) -> Envelope:
        """Filter, sort and page ``view`` according to the raw ``params``."""

        if isinstance(view, str):
            try:
                view = get_view(view)
            except UnknownViewError as exc:
                return fail(str(exc))

        composed = compose(view, params)
        with log_context.scoped(view=view.name):
            LOGGER.debug(
                "Listing %s page=%s limit=%s strict=%s",
                view.name,
                composed.spec.page,
                composed.spec.limit,
                sorted(composed.plan.strict_relations),
            )
            try:
                result = await self._repository.fetch_page(composed)
            except STORE_ERRORS as exc:
                return store_failure(f"Listing {view.name}", exc, logger=LOGGER)

        return ok(result.rows, page_meta(result.total_count, composed.spec))

    async def list_accounts(self, params: Mapping[str, Any] | None = None) -> Envelope:
        return await self.list_view("accounts", params)

    async def list_businesses(self, params: Mapping[str, Any] | None = None) -> Envelope:
        return await self.list_view("businesses", params)

    async def list_investments(self, params: Mapping[str, Any] | None = None) -> Envelope:
        return await self.list_view("investments", params)

    async def list_taxes(self, params: Mapping[str, Any] | None = None) -> Envelope:
        return await self.list_view("taxes", params)

    async def list_assets(self, params: Mapping[str, Any] | None = None) -> Envelope:
        return await self.list_view("assets", params)

    async def get_account_details(self, account_id: int) -> Envelope:
        try:
            account = await self._repository.get_by_key(Account, account_id)
        except STORE_ERRORS as exc:
            return store_failure(f"Loading account {account_id}", exc, logger=LOGGER)
        if account is None:
            return fail(ACCOUNT_NOT_FOUND)
        return ok(account)

    async def get_account_statuses(self) -> Envelope:
        """Distinct account status codes, highest first."""

        try:
            statuses = await self._repository.distinct_values(Account.account_status)
        except STORE_ERRORS as exc:
            return store_failure("Loading account statuses", exc, logger=LOGGER)
        return ok(statuses)

    async def count_records(self, view_name: str) -> Envelope:
        try:
            view = get_view(view_name)
        except UnknownViewError as exc:
            return fail(str(exc))
        try:
            count = await self._repository.count_rows(view.model)
        except STORE_ERRORS as exc:
            return store_failure(f"Counting {view.name}", exc, logger=LOGGER)
        return ok(CountPayload(count=count))

    async def list_lookup(self, name: str) -> Envelope:
        try:
            lookup = LOOKUPS[name]
        except KeyError:
            return fail(f"Unknown lookup: {name}")
        try:
            rows = await self._repository.list_all(lookup.model, lookup.order_by, lookup.relations)
        except STORE_ERRORS as exc:
            return store_failure(f"Loading {name}", exc, logger=LOGGER)
        return ok(rows)
