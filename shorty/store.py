"""Thread-safe key -> URL store with background snapshot persistence."""

import logging
from typing import Dict, Optional, Tuple

from .exceptions import PersistenceError
from .persistence import SnapshotWriter
from .rwlock import ReadWriteLock
from .shortcode import ShortCodeGenerator
from .snapshot import load_snapshot


class URLStore:
    """In-memory mapping from short keys to long URLs.

    Every access to the mapping goes through a single reader/writer lock:
    lookups share it, inserts and snapshots take it exclusively. After each
    insert a snapshot write is handed to a background worker; the insert
    returns without waiting for the disk.

    The store loads the previous snapshot at construction. A missing file
    means an empty store. An unreadable or corrupt file is logged as a
    warning, kept on ``load_error``, and the store starts empty.
    """

    def __init__(
        self,
        path: str,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize URL store.

        Args:
            path: Snapshot file path
            short_code_generator: Optional short key generator
            logger: Optional logger
        """
        self._path = path
        self._entries: Dict[str, str] = {}
        self._lock = ReadWriteLock()
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.writer = SnapshotWriter(path, self._snapshot, logger=self.logger)
        self.load_error: Optional[PersistenceError] = None

        try:
            self._load()
        except PersistenceError as e:
            self.load_error = e
            self.logger.warning(f"Could not load data from {path}: {e}")

    @property
    def path(self) -> str:
        """Snapshot file path."""
        return self._path

    def add(self, url: str, custom_key: Optional[str] = None) -> str:
        """Store a URL under a custom or generated key.

        An existing entry with the same key is overwritten.

        Args:
            url: The long URL (stored as-is, not validated)
            custom_key: Key to use verbatim, or None to generate one

        Returns:
            The key the URL was stored under

        Raises:
            KeyGenerationError: If a key had to be generated and the secure
                random source failed
        """
        if custom_key is not None:
            key = custom_key
        else:
            key = self.generator.generate()

        with self._lock.write_locked():
            self._entries[key] = url

        self.writer.schedule()
        self.logger.info(f"Stored short key: {key} -> {url}")
        return key

    def get(self, key: str) -> Tuple[Optional[str], bool]:
        """Look up the URL for a key.

        Args:
            key: The short key (may be empty or unknown)

        Returns:
            Tuple of (url, found); url is None when not found
        """
        with self._lock.read_locked():
            url = self._entries.get(key)

        if url is None:
            self.logger.debug(f"Short key not found: {key}")
            return None, False
        return url, True

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait for snapshot writes scheduled so far to be attempted.

        Args:
            timeout: Maximum seconds to wait (None waits indefinitely)

        Returns:
            True if all pending writes settled, False on timeout
        """
        return self.writer.flush(timeout)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)

    def _snapshot(self) -> Dict[str, str]:
        """Copy the mapping under exclusive access."""
        with self._lock.write_locked():
            return dict(self._entries)

    def _load(self) -> None:
        """Replace the mapping with the contents of the snapshot file."""
        entries = load_snapshot(self._path)
        if entries is None:
            self.logger.info(f"No snapshot at {self._path}, starting empty")
            return

        with self._lock.write_locked():
            self._entries = entries

        self.logger.info(f"Loaded {len(entries)} entries from {self._path}")
