"""Short key generation utilities."""

import re
import secrets

from .exceptions import KeyGenerationError


class ShortCodeGenerator:
    """Generate random short keys for URLs."""

    DEFAULT_KEY_BYTES = 4

    HEX_PATTERN = re.compile(r'^[0-9a-f]+$')

    def __init__(self, key_bytes: int = DEFAULT_KEY_BYTES):
        """Initialize short key generator.

        Args:
            key_bytes: Number of random bytes per key (each renders as two hex chars)
        """
        if key_bytes < 1:
            raise ValueError("key_bytes must be at least 1")
        self.key_bytes = key_bytes

    @property
    def key_length(self) -> int:
        """Length of generated keys in characters."""
        return self.key_bytes * 2

    def generate(self) -> str:
        """Generate a random short key.

        Draws bytes from the operating system's secure random source and
        renders them as lowercase hexadecimal. No collision check is made
        against existing keys.

        Returns:
            Random short key, e.g. '9f86d081'

        Raises:
            KeyGenerationError: If the secure random source is unavailable
        """
        try:
            raw = secrets.token_bytes(self.key_bytes)
        except (OSError, NotImplementedError) as e:
            raise KeyGenerationError(f"Secure random source unavailable: {e}") from e

        return raw.hex()

    def is_valid_format(self, code: str) -> bool:
        """Check whether a code has the shape of a generated key.

        Args:
            code: Code to check

        Returns:
            True if the code is lowercase hex of the generated length
        """
        if not isinstance(code, str) or len(code) != self.key_length:
            return False
        return bool(self.HEX_PATTERN.match(code))
