"""Exceptions raised by the Shorty store."""

from typing import Optional


class ShortyError(Exception):
    """Base exception for all Shorty errors."""

    error_code = "shorty:error"


class KeyGenerationError(ShortyError):
    """Raised when the secure random source cannot produce a key."""

    error_code = "shorty:key_generation_error"


class PersistenceError(ShortyError):
    """Raised when a snapshot cannot be read from or written to disk."""

    error_code = "shorty:persistence_error"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
