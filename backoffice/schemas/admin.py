"""Schemas for admin list envelopes and the dashboard payload."""
from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")


class PageMeta(BaseModel):
    """Pagination metadata attached to list responses."""

    model_config = ConfigDict(populate_by_name=True)

    total: int | None
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")


class SuccessEnvelope(BaseModel, Generic[DataT]):
    success: Literal[True] = True
    data: DataT
    meta: PageMeta | None = None


class ErrorEnvelope(BaseModel):
    success: Literal[False] = False
    error: str


class CountPayload(BaseModel):
    count: int


class GrowthStat(BaseModel):
    """Row count for a category and its month-over-month change in percent."""

    count: int = 0
    growth: float = 0.0


class DashboardStats(BaseModel):
    accounts: GrowthStat
    businesses: GrowthStat
    assets: GrowthStat
    investments: GrowthStat


class DashboardStatCard(BaseModel):
    title: str
    value: int
    change: str
    trend: Literal["up", "down", "neutral"]


class AdminProfile(BaseModel):
    account_id: int | None = None
    first_name: str | None = None
    last_name: str | None = None

    @property
    def display_name(self) -> str | None:
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else None


class DashboardData(BaseModel):
    """Payload rendered on the admin landing page."""

    admin: AdminProfile
    greeting: str
    stats: DashboardStats
    cards: list[DashboardStatCard]


def envelope_payload(envelope: SuccessEnvelope[Any] | ErrorEnvelope) -> dict[str, Any]:
    """Serialise an envelope with camelCase meta keys, omitting an absent meta."""

    exclude = None
    if isinstance(envelope, SuccessEnvelope) and envelope.meta is None:
        exclude = {"meta"}
    return envelope.model_dump(mode="json", by_alias=True, exclude=exclude)
