"""Growth statistics and dashboard assembly."""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backoffice.models import Account, UserAsset, UserBusiness, UserInvestment
from backoffice.services.admin_dashboard import (
    GROWTH_CATEGORIES,
    AdminDashboardService,
    GrowthStatsAggregator,
    compute_growth,
    format_change,
    greeting_for,
    start_of_month,
    trend_for,
)

NOW = datetime(2024, 6, 15, 10, 30, tzinfo=timezone.utc)
MAY = datetime(2024, 5, 20, 8, 0, tzinfo=timezone.utc)
JUNE = datetime(2024, 6, 2, 8, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "previous,current,expected",
    [(0, 0, 0.0), (0, 5, 100.0), (10, 15, 50.0), (10, 5, -50.0), (4, 4, 0.0)],
)
def test_growth_policy(previous: int, current: int, expected: float) -> None:
    assert compute_growth(current, previous) == pytest.approx(expected)


@pytest.mark.parametrize(
    "growth,change,trend",
    [
        (12.6, "+13%", "up"),
        (2.5, "+3%", "up"),
        (0.3, "0%", "up"),
        (0.0, "0%", "neutral"),
        (-2.5, "-2%", "down"),
        (-50.0, "-50%", "down"),
    ],
)
def test_card_formatting(growth: float, change: str, trend: str) -> None:
    assert format_change(growth) == change
    assert trend_for(growth) == trend


@pytest.mark.parametrize(
    "hour,greeting",
    [(0, "Good Morning"), (11, "Good Morning"), (12, "Good Afternoon"), (17, "Good Afternoon"), (18, "Good Evening")],
)
def test_greeting(hour: int, greeting: str) -> None:
    assert greeting_for(NOW.replace(hour=hour)) == greeting


def test_start_of_month() -> None:
    assert start_of_month(NOW) == datetime(2024, 6, 1, tzinfo=timezone.utc)


def _account(account_id: int, created_at: datetime) -> Account:
    return Account(
        account_id=account_id,
        account_uname=f"user{account_id}",
        account_email=f"user{account_id}@example.test",
        account_fname="Test",
        created_at=created_at,
    )


async def test_growth_from_database(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory() as session:
        session.add_all(_account(i, MAY) for i in range(1, 11))
        session.add_all(_account(i, JUNE) for i in range(11, 16))
        session.add_all(
            UserInvestment(user_investment_id=i, account_id=11, user_investment_issued=JUNE)
            for i in range(1, 6)
        )
        await session.commit()

    stats = await GrowthStatsAggregator(session_factory).collect(NOW)

    assert (stats.accounts.count, stats.accounts.growth) == (15, pytest.approx(50.0))
    assert (stats.investments.count, stats.investments.growth) == (5, pytest.approx(100.0))
    assert (stats.businesses.count, stats.businesses.growth) == (0, 0.0)
    assert (stats.assets.count, stats.assets.growth) == (0, 0.0)


_COUNTS = {
    Account: (15, 10),
    UserBusiness: (7, 7),
    UserAsset: (5, 10),
    UserInvestment: (3, 0),
}


def _store_error() -> OperationalError:
    return OperationalError("SELECT count(*)", {}, Exception("database is locked"))


class _FakeStatsRepository:
    """Serves canned counts; failures are configured per model."""

    fail_total: set[type] = set()
    fail_before: set[type] = set()

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def count_total(self, model) -> int:
        if model in self.fail_total:
            raise _store_error()
        return _COUNTS[model][0]

    async def count_before(self, model, column, cutoff) -> int:
        if model in self.fail_before:
            raise _store_error()
        return _COUNTS[model][1]


async def test_failures_are_contained(session_factory: async_sessionmaker[AsyncSession]) -> None:
    class _Flaky(_FakeStatsRepository):
        fail_total = {UserBusiness}
        fail_before = {UserAsset}

    aggregator = GrowthStatsAggregator(session_factory, repository_cls=_Flaky)

    stats = await aggregator.collect(NOW)

    assert stats.businesses.model_dump() == {"count": 0, "growth": 0.0}
    assert stats.assets.model_dump() == {"count": 5, "growth": 0.0}
    assert stats.accounts.growth == pytest.approx(50.0)
    assert stats.investments.growth == pytest.approx(100.0)


async def test_results_are_recombined_by_key(
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    aggregator = GrowthStatsAggregator(
        session_factory,
        repository_cls=_FakeStatsRepository,
        categories=tuple(reversed(GROWTH_CATEGORIES)),
    )

    stats = await aggregator.collect(NOW)

    assert stats.accounts.count == 15
    assert stats.assets.count == 5
    assert stats.assets.growth == pytest.approx(-50.0)
    assert stats.investments.count == 3


async def test_categories_are_counted_concurrently(
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    arrived: list[type] = []
    everyone_in = asyncio.Event()

    class _Barrier(_FakeStatsRepository):
        async def count_total(self, model) -> int:
            arrived.append(model)
            if len(arrived) == len(GROWTH_CATEGORIES):
                everyone_in.set()
            await everyone_in.wait()
            return await super().count_total(model)

    aggregator = GrowthStatsAggregator(session_factory, repository_cls=_Barrier)

    stats = await asyncio.wait_for(aggregator.collect(NOW), timeout=5)

    assert len(arrived) == 4
    assert stats.businesses.count == 7


async def test_dashboard_payload(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory() as session:
        session.add(
            Account(
                account_id=1,
                account_uname="root",
                account_email="root@example.test",
                account_fname="Ada",
                account_lname="Lovelace",
                created_at=MAY,
            )
        )
        await session.commit()

    service = AdminDashboardService(session_factory)
    evening = NOW.replace(hour=19)

    data = await service.get_dashboard_data(1, now=evening)

    assert data.greeting == "Good Evening"
    assert data.admin.display_name == "Ada Lovelace"
    assert [card.title for card in data.cards] == [
        "Total Accounts",
        "Total Businesses",
        "Total Assets",
        "Total Investments",
    ]
    accounts_card = data.cards[0]
    assert (accounts_card.value, accounts_card.change, accounts_card.trend) == (1, "0%", "neutral")


async def test_dashboard_for_unknown_admin(session_factory: async_sessionmaker[AsyncSession]) -> None:
    data = await AdminDashboardService(session_factory).get_dashboard_data(404, now=NOW)

    assert data.admin.account_id == 404
    assert data.admin.display_name is None
    assert data.greeting == "Good Morning"
    assert all(card.value == 0 and card.change == "0%" for card in data.cards)
