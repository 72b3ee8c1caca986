"""Repositories backing the admin list views and dashboard."""

from .listing_repository import AdminListingRepository, QueryResult
from .stats_repository import AdminStatsRepository

__all__ = ["AdminListingRepository", "AdminStatsRepository", "QueryResult"]
