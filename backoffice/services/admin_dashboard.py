"""Service logic for the admin dashboard and its growth statistics."""
from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import InstrumentedAttribute

from backoffice.core.log import get_logger, timeit
from backoffice.models import Account, Base, UserAsset, UserBusiness, UserInvestment
from backoffice.repositories.admin import AdminStatsRepository
from backoffice.schemas.admin import (
    AdminProfile,
    DashboardData,
    DashboardStatCard,
    DashboardStats,
    GrowthStat,
)

from .envelope import STORE_ERRORS

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class GrowthCategory:
    """One dashboard counter: a table and the timestamp that dates its rows."""

    key: str
    title: str
    model: type[Base]
    timestamp: InstrumentedAttribute[Any]


GROWTH_CATEGORIES: tuple[GrowthCategory, ...] = (
    GrowthCategory("accounts", "Total Accounts", Account, Account.created_at),
    GrowthCategory("businesses", "Total Businesses", UserBusiness, UserBusiness.created_at),
    GrowthCategory("assets", "Total Assets", UserAsset, UserAsset.created_at),
    GrowthCategory(
        "investments",
        "Total Investments",
        UserInvestment,
        UserInvestment.user_investment_issued,
    ),
)


def start_of_month(moment: datetime) -> datetime:
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def compute_growth(current: int, previous: int) -> float:
    """Percentage change from ``previous`` to ``current``.

    A category that starts from nothing counts as 100% growth when it has any
    rows now, and as no growth otherwise.
    """

    if previous > 0:
        return (current - previous) / previous * 100
    if current > 0:
        return 100.0
    return 0.0


def greeting_for(moment: datetime) -> str:
    if moment.hour < 12:
        return "Good Morning"
    if moment.hour < 18:
        return "Good Afternoon"
    return "Good Evening"


def format_change(growth: float) -> str:
    # Half-up rounding, so 2.5 shows as +3% and -2.5 as -2%.
    value = math.floor(growth + 0.5)
    if value > 0:
        return f"+{value}%"
    if value < 0:
        return f"{value}%"
    return "0%"


def trend_for(growth: float) -> str:
    if growth > 0:
        return "up"
    if growth < 0:
        return "down"
    return "neutral"


class GrowthStatsAggregator:
    """Compute month-over-month growth for every dashboard category.

    Each category is counted on its own session so the queries run
    concurrently. A failing count never fails the dashboard: the affected
    category degrades to a zero stat and the error is logged.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        repository_cls: Callable[[AsyncSession], AdminStatsRepository] = AdminStatsRepository,
        categories: tuple[GrowthCategory, ...] = GROWTH_CATEGORIES,
    ) -> None:
        self._session_factory = session_factory
        self._repository_cls = repository_cls
        self._categories = categories

    async def growth_stat(self, category: GrowthCategory, now: datetime) -> GrowthStat:
        cutoff = start_of_month(now)
        async with self._session_factory() as session:
            repository = self._repository_cls(session)
            try:
                current = await repository.count_total(category.model)
            except STORE_ERRORS as exc:
                LOGGER.error("Counting %s failed: %s", category.key, exc)
                return GrowthStat(count=0, growth=0)
            try:
                previous = await repository.count_before(category.model, category.timestamp, cutoff)
            except STORE_ERRORS as exc:
                LOGGER.error("Counting %s before %s failed: %s", category.key, cutoff.date(), exc)
                return GrowthStat(count=current, growth=0)

        return GrowthStat(count=current, growth=compute_growth(current, previous))

    async def collect(self, now: datetime | None = None) -> DashboardStats:
        moment = now or datetime.now().astimezone()
        with timeit("Dashboard growth stats", logger=LOGGER, unit="categories") as timer:
            results = await asyncio.gather(
                *(self.growth_stat(category, moment) for category in self._categories)
            )
            timer.set_total(len(results))
        by_key = {category.key: stat for category, stat in zip(self._categories, results)}
        return DashboardStats(**by_key)


class AdminDashboardService:
    """Assemble the dashboard payload for the signed-in administrator."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        aggregator: GrowthStatsAggregator | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._aggregator = aggregator or GrowthStatsAggregator(session_factory)

    async def _profile(self, admin_id: int | None) -> AdminProfile:
        if admin_id is None:
            return AdminProfile()
        try:
            async with self._session_factory() as session:
                names = await AdminStatsRepository(session).display_name(admin_id)
        except STORE_ERRORS as exc:
            LOGGER.error("Loading admin profile %s failed: %s", admin_id, exc)
            names = None
        if names is None:
            return AdminProfile(account_id=admin_id)
        first_name, last_name = names
        return AdminProfile(account_id=admin_id, first_name=first_name, last_name=last_name)

    async def get_dashboard_data(
        self,
        admin_id: int | None,
        now: datetime | None = None,
    ) -> DashboardData:
        moment = now or datetime.now().astimezone()
        profile, stats = await asyncio.gather(
            self._profile(admin_id),
            self._aggregator.collect(moment),
        )
        return DashboardData(
            admin=profile,
            greeting=greeting_for(moment),
            stats=stats,
            cards=build_cards(stats),
        )


def build_cards(stats: DashboardStats) -> list[DashboardStatCard]:
    cards = []
    for category in GROWTH_CATEGORIES:
        stat: GrowthStat = getattr(stats, category.key)
        cards.append(
            DashboardStatCard(
                title=category.title,
                value=stat.count,
                change=format_change(stat.growth),
                trend=trend_for(stat.growth),
            )
        )
    return cards
