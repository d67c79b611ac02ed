"""Background snapshot persistence for the URL store."""

import logging
import threading
from typing import Callable, Dict, Optional

from .exceptions import PersistenceError
from .snapshot import save_snapshot


class SnapshotWriter:
    """Single background worker that writes store snapshots to disk.

    Callers signal that the store changed with schedule(), which never
    blocks on I/O. The worker coalesces pending signals: each cycle takes
    one fresh snapshot that covers every request issued before the cycle
    started, so a burst of inserts produces a single write and two writes
    of the same file never run at once.

    Failures are logged and dropped. Nothing is retried.
    """

    def __init__(
        self,
        path: str,
        take_snapshot: Callable[[], Dict[str, str]],
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize snapshot writer.

        Args:
            path: Snapshot file path
            take_snapshot: Callable returning a consistent copy of the mapping
            logger: Optional logger
        """
        self.path = path
        self._take_snapshot = take_snapshot
        self.logger = logger or logging.getLogger(__name__)

        self._cond = threading.Condition()
        self._requested = 0
        self._settled = 0
        self._thread: Optional[threading.Thread] = None

        self.writes = 0
        self.failures = 0
        self.last_error: Optional[PersistenceError] = None

    def schedule(self) -> None:
        """Request a snapshot write without waiting for it."""
        with self._cond:
            self._requested += 1
            if self._thread is None or not self._thread.is_alive():
                self._thread = threading.Thread(
                    target=self._run,
                    name=f"snapshot-writer:{self.path}",
                    daemon=True,
                )
                self._thread.start()
            self._cond.notify_all()

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait until every write requested so far has been attempted.

        Args:
            timeout: Maximum seconds to wait (None waits indefinitely)

        Returns:
            True if all pending writes settled, False on timeout
        """
        with self._cond:
            target = self._requested
            return self._cond.wait_for(lambda: self._settled >= target, timeout)

    @property
    def pending(self) -> bool:
        """Whether requested writes have not been attempted yet."""
        with self._cond:
            return self._settled < self._requested

    def _run(self) -> None:
        """Worker loop."""
        while True:
            with self._cond:
                while self._settled >= self._requested:
                    self._cond.wait()
                target = self._requested

            self._write_once()

            with self._cond:
                self._settled = target
                self._cond.notify_all()

    def _write_once(self) -> None:
        """Take one snapshot and write it, logging the outcome."""
        try:
            entries = self._take_snapshot()
            save_snapshot(self.path, entries)
        except PersistenceError as e:
            self.failures += 1
            self.last_error = e
            self.logger.error(f"Error saving snapshot to {self.path}: {e}")
            return
        except Exception as e:
            # Worker must outlive unexpected errors or flush() would hang.
            self.failures += 1
            self.last_error = PersistenceError(str(e), path=self.path)
            self.logger.exception(f"Unexpected error saving snapshot to {self.path}: {e}")
            return

        self.writes += 1
        self.logger.debug(f"Saved snapshot with {len(entries)} entries to {self.path}")
