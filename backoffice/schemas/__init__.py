"""Pydantic schemas exposed by the back office."""

from .admin import (
    AdminProfile,
    CountPayload,
    DashboardData,
    DashboardStatCard,
    DashboardStats,
    ErrorEnvelope,
    GrowthStat,
    PageMeta,
    SuccessEnvelope,
    envelope_payload,
)

__all__ = [
    "AdminProfile",
    "CountPayload",
    "DashboardData",
    "DashboardStatCard",
    "DashboardStats",
    "ErrorEnvelope",
    "GrowthStat",
    "PageMeta",
    "SuccessEnvelope",
    "envelope_payload",
]
