"""JSON snapshot file handling for the URL store.

A snapshot is the whole key -> URL mapping serialized as a single JSON
object. Every save rewrites the file completely: the new content is written
to a temporary file beside the target and then renamed over it, so readers
only ever see the old snapshot or the new one.
"""

import json
import os
import tempfile
from typing import Dict, Optional

from .exceptions import PersistenceError


def load_snapshot(path: str) -> Optional[Dict[str, str]]:
    """Read a snapshot file.

    Args:
        path: Snapshot file path

    Returns:
        The stored mapping, or None if the file does not exist

    Raises:
        PersistenceError: If the file exists but cannot be read or parsed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise PersistenceError(f"Cannot read snapshot {path}: {e}", path=path) from e
    except json.JSONDecodeError as e:
        raise PersistenceError(f"Corrupt snapshot {path}: {e}", path=path) from e

    if not isinstance(data, dict):
        raise PersistenceError(
            f"Corrupt snapshot {path}: expected a JSON object, got {type(data).__name__}",
            path=path,
        )

    for key, value in data.items():
        if not isinstance(value, str):
            raise PersistenceError(
                f"Corrupt snapshot {path}: value for key {key!r} is not a string",
                path=path,
            )

    return data


def save_snapshot(path: str, entries: Dict[str, str]) -> None:
    """Write a snapshot file, replacing any previous one.

    Args:
        path: Snapshot file path
        entries: Mapping to persist

    Raises:
        PersistenceError: If the snapshot cannot be serialized or written
    """
    directory = os.path.dirname(os.path.abspath(path))

    try:
        payload = json.dumps(entries, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise PersistenceError(f"Cannot serialize snapshot: {e}", path=path) from e

    tmp_path = None
    try:
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{os.path.basename(path)}.",
            suffix=".tmp",
            dir=directory,
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise PersistenceError(f"Cannot write snapshot {path}: {e}", path=path) from e
