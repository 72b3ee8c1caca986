"""FastAPI application instance for the admin back office."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from backoffice.core.config import Settings, get_settings
from backoffice.core.log import LoggingConfig, get_logger, init_logging
from backoffice.web.routers import admin as admin_router

LOGGER = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Instantiate and configure the FastAPI application."""

    resolved = settings or get_settings()
    init_logging(LoggingConfig.from_settings(resolved))
    LOGGER.info("Starting back office (database %s)", resolved.database.masked_url)

    application = FastAPI(title="Back Office Admin API")
    application.include_router(admin_router.router)

    @application.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:  # pragma: no cover - simple redirect
        return RedirectResponse(url="/admin/api/dashboard", status_code=302)

    return application


app = create_app()
