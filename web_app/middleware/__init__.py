"""Middleware for Shorty web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
