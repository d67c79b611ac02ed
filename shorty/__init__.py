"""Core store for the Shorty redirect service."""

from .exceptions import ShortyError, KeyGenerationError, PersistenceError
from .shortcode import ShortCodeGenerator
from .store import URLStore

__all__ = [
    "ShortyError",
    "KeyGenerationError",
    "PersistenceError",
    "ShortCodeGenerator",
    "URLStore",
]
