"""Route wiring, session checks and envelope serialisation for the admin API."""
from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal
from typing import Any

import pytest
from fastapi.testclient import TestClient

from backoffice.core.config import AuthSettings
from backoffice.core.security import AuthenticatedAdmin, SecurityProvider, get_security_provider
from backoffice.main import app
from backoffice.query import normalize_filters
from backoffice.query.views import ACCOUNT_VIEW
from backoffice.schemas.admin import AdminProfile, DashboardData, DashboardStats, GrowthStat
from backoffice.services.admin_dashboard import build_cards
from backoffice.services.envelope import fail, ok, page_meta
from backoffice.web.dependencies import get_dashboard_service, get_listing_service

SECURITY = SecurityProvider(AuthSettings(secret_key="test-secret"))


class _StubListingService:
    """Record calls and return canned envelopes."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    async def list_accounts(self, params):
        self.calls.append(("accounts", params))
        spec = normalize_filters(ACCOUNT_VIEW, params)
        return ok(
            [{"account_id": 7, "account_total_investment": Decimal("12.50")}],
            page_meta(41, spec),
        )

    async def list_businesses(self, params):
        self.calls.append(("businesses", params))
        return fail("Database request failed")

    async def list_investments(self, params):  # pragma: no cover - exercised via endpoint
        self.calls.append(("investments", params))
        return ok([])

    async def list_taxes(self, params):  # pragma: no cover - exercised via endpoint
        self.calls.append(("taxes", params))
        return ok([])

    async def list_assets(self, params):  # pragma: no cover - exercised via endpoint
        self.calls.append(("assets", params))
        return ok([])

    async def get_account_statuses(self):
        self.calls.append(("statuses", None))
        return ok([1, 0])

    async def get_account_details(self, account_id):
        self.calls.append(("details", account_id))
        return fail("Account not found")

    async def count_records(self, view):
        self.calls.append(("count", view))
        return ok({"count": 3})

    async def list_lookup(self, name):
        self.calls.append(("lookup", name))
        return ok([{"tax_type_id": 1}])


class _StubDashboardService:
    def __init__(self) -> None:
        self.admin_ids: list[int | None] = []

    async def get_dashboard_data(self, admin_id, now=None) -> DashboardData:
        self.admin_ids.append(admin_id)
        stats = DashboardStats(
            accounts=GrowthStat(count=15, growth=50.0),
            businesses=GrowthStat(),
            assets=GrowthStat(count=2, growth=-12.4),
            investments=GrowthStat(count=5, growth=100.0),
        )
        return DashboardData(
            admin=AdminProfile(account_id=admin_id, first_name="Ada"),
            greeting="Good Morning",
            stats=stats,
            cards=build_cards(stats),
        )


@pytest.fixture
def listing() -> _StubListingService:
    return _StubListingService()


@pytest.fixture
def dashboard() -> _StubDashboardService:
    return _StubDashboardService()


@pytest.fixture
def client(listing: _StubListingService, dashboard: _StubDashboardService) -> Iterator[TestClient]:
    app.dependency_overrides[get_security_provider] = lambda: SECURITY
    app.dependency_overrides[get_listing_service] = lambda: listing
    app.dependency_overrides[get_dashboard_service] = lambda: dashboard
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _login(client: TestClient, account_id: int = 1, role: str = "admin") -> None:
    token = SECURITY.create_access_token(AuthenticatedAdmin(account_id=account_id, role=role))
    client.cookies.set(SECURITY.cookie_name, token)


def test_missing_session_is_rejected(client: TestClient, listing: _StubListingService) -> None:
    response = client.get("/admin/api/accounts")

    assert response.status_code == 401
    assert listing.calls == []


def test_tampered_session_is_rejected(client: TestClient) -> None:
    client.cookies.set(SECURITY.cookie_name, "not-a-token")

    assert client.get("/admin/api/accounts").status_code == 401


def test_non_admin_is_forbidden(client: TestClient) -> None:
    _login(client, role="player")

    assert client.get("/admin/api/taxes").status_code == 403


def test_list_passes_raw_query_params(client: TestClient, listing: _StubListingService) -> None:
    _login(client)

    response = client.get("/admin/api/accounts", params={"status": "1", "page": "2", "limit": "20"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": [{"account_id": 7, "account_total_investment": "12.50"}],
        "meta": {"total": 41, "page": 2, "limit": 20, "totalPages": 3},
    }
    assert listing.calls == [("accounts", {"status": "1", "page": "2", "limit": "20"})]


def test_error_envelope_is_returned(client: TestClient) -> None:
    _login(client)

    response = client.get("/admin/api/businesses")

    assert response.json() == {"success": False, "error": "Database request failed"}


def test_read_routes_are_distinguished(client: TestClient, listing: _StubListingService) -> None:
    _login(client)

    assert client.get("/admin/api/accounts/statuses").json()["data"] == [1, 0]
    assert client.get("/admin/api/accounts/count").json()["data"] == {"count": 3}
    assert client.get("/admin/api/accounts/12").json()["error"] == "Account not found"
    assert client.get("/admin/api/lookups/tax-types").json()["success"] is True

    assert listing.calls == [
        ("statuses", None),
        ("count", "accounts"),
        ("details", 12),
        ("lookup", "tax-types"),
    ]


def test_dashboard_uses_session_identity(client: TestClient, dashboard: _StubDashboardService) -> None:
    _login(client, account_id=42)

    response = client.get("/admin/api/dashboard")

    assert response.status_code == 200
    body = response.json()
    assert dashboard.admin_ids == [42]
    assert body["greeting"] == "Good Morning"
    assert [card["change"] for card in body["cards"]] == ["+50%", "0%", "-12%", "+100%"]
    assert [card["trend"] for card in body["cards"]] == ["up", "neutral", "down", "up"]


def test_auth_can_be_disabled(dashboard: _StubDashboardService) -> None:
    disabled = SecurityProvider(AuthSettings(enabled=False))
    app.dependency_overrides[get_security_provider] = lambda: disabled
    app.dependency_overrides[get_dashboard_service] = lambda: dashboard
    try:
        response = TestClient(app).get("/admin/api/dashboard")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert dashboard.admin_ids == [None]
