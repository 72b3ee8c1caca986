"""JSON routes backing the admin screens."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from backoffice.core.security import AuthenticatedAdmin, require_admin
from backoffice.schemas.admin import DashboardData, envelope_payload
from backoffice.services.admin_dashboard import AdminDashboardService
from backoffice.services.admin_listing import AdminListingService
from backoffice.web.dependencies import get_dashboard_service, get_listing_service

router = APIRouter(
    prefix="/admin/api",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


def _params(request: Request) -> dict[str, str]:
    # Repeated keys keep their last value.
    return dict(request.query_params)


@router.get("/dashboard", response_model=DashboardData)
async def admin_dashboard(
    principal: AuthenticatedAdmin = Depends(require_admin),
    service: AdminDashboardService = Depends(get_dashboard_service),
) -> DashboardData:
    """Greeting, growth statistics and stat cards for the current admin."""

    return await service.get_dashboard_data(principal.account_id)


@router.get("/accounts")
async def list_accounts(
    request: Request,
    service: AdminListingService = Depends(get_listing_service),
) -> dict[str, Any]:
    return envelope_payload(await service.list_accounts(_params(request)))


@router.get("/businesses")
async def list_businesses(
    request: Request,
    service: AdminListingService = Depends(get_listing_service),
) -> dict[str, Any]:
    return envelope_payload(await service.list_businesses(_params(request)))


@router.get("/investments")
async def list_investments(
    request: Request,
    service: AdminListingService = Depends(get_listing_service),
) -> dict[str, Any]:
    return envelope_payload(await service.list_investments(_params(request)))


@router.get("/taxes")
async def list_taxes(
    request: Request,
    service: AdminListingService = Depends(get_listing_service),
) -> dict[str, Any]:
    return envelope_payload(await service.list_taxes(_params(request)))


@router.get("/assets")
async def list_assets(
    request: Request,
    service: AdminListingService = Depends(get_listing_service),
) -> dict[str, Any]:
    return envelope_payload(await service.list_assets(_params(request)))


@router.get("/accounts/statuses")
async def account_statuses(
    service: AdminListingService = Depends(get_listing_service),
) -> dict[str, Any]:
    return envelope_payload(await service.get_account_statuses())


@router.get("/lookups/{name}")
async def lookup(
    name: str,
    service: AdminListingService = Depends(get_listing_service),
) -> dict[str, Any]:
    return envelope_payload(await service.list_lookup(name))


# Registered before the account detail route so "/accounts/count" is a count.
@router.get("/{view}/count")
async def count_records(
    view: str,
    service: AdminListingService = Depends(get_listing_service),
) -> dict[str, Any]:
    return envelope_payload(await service.count_records(view))


@router.get("/accounts/{account_id}")
async def account_detail(
    account_id: int,
    service: AdminListingService = Depends(get_listing_service),
) -> dict[str, Any]:
    return envelope_payload(await service.get_account_details(account_id))
