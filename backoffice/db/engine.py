"""Database engine factories."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from backoffice.core.config import get_settings
from backoffice.core.log import get_logger

LOGGER = get_logger(__name__)


def create_engine(url: str | None = None, **kwargs) -> AsyncEngine:
    """Create an async SQLAlchemy engine using configured defaults."""

    settings = get_settings()
    resolved_url = url or settings.database.sqlalchemy_url

    options = dict(kwargs)
    options.setdefault("echo", settings.sqlalchemy_echo)

    masked_url = settings.database.masked_url if url is None else url.split("@")[-1]
    LOGGER.debug("Creating SQLAlchemy engine (%s) options=%s", masked_url, options)
    return create_async_engine(resolved_url, **options)
