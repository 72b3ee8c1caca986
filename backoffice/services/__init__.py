"""Service layer entrypoints for the admin back office."""

from .admin_dashboard import AdminDashboardService, GrowthStatsAggregator
from .admin_listing import AdminListingService

__all__ = [
    "AdminDashboardService",
    "AdminListingService",
    "GrowthStatsAggregator",
]
