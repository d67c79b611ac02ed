"""FastAPI web application for Shorty."""

from .app_factory import create_app

__all__ = ["create_app"]
