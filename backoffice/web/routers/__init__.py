"""Router package for the FastAPI application."""

from . import admin

__all__ = ["admin"]
