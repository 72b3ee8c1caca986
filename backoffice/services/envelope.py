"""Build the uniform success/failure envelope returned by admin reads."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from backoffice.core.log import get_logger
from backoffice.query import FilterSpec, total_pages
from backoffice.schemas.admin import ErrorEnvelope, PageMeta, SuccessEnvelope

LOGGER = get_logger(__name__)

STORE_FAILURE_MESSAGE = "Database request failed"

# Errors converted into an error envelope instead of propagating.
STORE_ERRORS = (SQLAlchemyError, OSError)


def ok(data: Any, meta: PageMeta | None = None) -> SuccessEnvelope[Any]:
    return SuccessEnvelope(data=data, meta=meta)


def fail(message: str) -> ErrorEnvelope:
    return ErrorEnvelope(error=message)


def page_meta(total: int | None, spec: FilterSpec) -> PageMeta:
    return PageMeta(
        total=total,
        page=spec.page,
        limit=spec.limit,
        total_pages=total_pages(total, spec.limit),
    )


def store_failure(action: str, exc: BaseException, *, logger: logging.Logger = LOGGER) -> ErrorEnvelope:
    """Log a store failure once and convert it to an error envelope."""

    logger.error("%s failed: %s", action, exc, exc_info=exc)
    detail = str(getattr(exc, "orig", None) or exc).strip()
    return fail(f"{STORE_FAILURE_MESSAGE}: {detail}" if detail else STORE_FAILURE_MESSAGE)
