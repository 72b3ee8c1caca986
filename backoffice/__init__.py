"""Admin back office for the banking simulator."""

from .core import get_logger, get_settings

__all__ = ["get_logger", "get_settings"]
