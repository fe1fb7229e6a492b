"""
Safe I/O operations with atomic writes and cooperative file locking.

Task stores and the configuration file are plain JSON documents that may be
touched by more than one ex-sync process (for example a manual run racing a
scheduled one), so every read takes a shared lock and every write replaces
the file atomically under an exclusive lock.
"""

import contextlib
import errno
import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

try:  # fcntl is only available on POSIX platforms
    import fcntl  # type: ignore
except ImportError:  # pragma: no cover - Windows fallback
    fcntl = None  # type: ignore


DEFAULT_LOCK_TIMEOUT = 8.0  # seconds
LOCK_SLEEP_INTERVAL = 0.05  # seconds

logger = logging.getLogger(__name__)


def _lock_file_path(path: Path) -> Path:
    """Return the companion lock file path for the target file."""
    return path.parent / f"{path.name}.lock"


@contextlib.contextmanager
def _file_lock(target_path: Path, exclusive: bool, timeout: float = DEFAULT_LOCK_TIMEOUT) -> Iterator[None]:
    """Acquire a cooperative file lock around the target path.

    Uses POSIX advisory locking via fcntl when available; otherwise acts as a no-op.
    """
    if fcntl is None:
        yield
        return

    lock_path = _lock_file_path(target_path)
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    lock_type = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
    deadline = time.monotonic() + timeout if timeout is not None else None

    with open(lock_path, "a") as lock_file:
        while True:
            try:
                flags = lock_type | fcntl.LOCK_NB if deadline is not None else lock_type
                fcntl.flock(lock_file.fileno(), flags)
                break
            except OSError as exc:  # pragma: no cover - depends on timing
                if exc.errno not in (errno.EACCES, errno.EAGAIN):
                    raise
                if deadline is not None and time.monotonic() >= deadline:
                    raise TimeoutError(f"Timed out waiting for lock on {target_path}") from exc
                time.sleep(LOCK_SLEEP_INTERVAL)

        try:
            yield
        finally:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)


def read_json(file_path: str, *, lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> Optional[Dict[str, Any]]:
    """
    Read JSON from file under a shared lock.

    Returns None when the file does not exist. Decode, lock and OS errors
    propagate to the caller.
    """
    path_obj = Path(os.path.expanduser(file_path))
    if not path_obj.exists():
        return None

    with _file_lock(path_obj, exclusive=False, timeout=lock_timeout):
        with path_obj.open('r', encoding='utf-8') as handle:
            return json.load(handle)


def safe_read_json(file_path: str, default: Optional[Dict] = None, *, lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> Dict[str, Any]:
    """
    Safely read JSON from file with error handling.

    Args:
        file_path: Path to JSON file
        default: Default value to return if file doesn't exist or is invalid

    Returns:
        Parsed JSON data or default value
    """
    if default is None:
        default = {}

    try:
        data = read_json(file_path, lock_timeout=lock_timeout)
    except TimeoutError as exc:
        logger.warning("Timed out waiting to read %s: %s", file_path, exc)
        return default
    except (ValueError, OSError) as exc:
        # ValueError covers both JSONDecodeError and UnicodeDecodeError
        logger.warning("Failed to read %s: %s", file_path, exc)
        return default

    return default if data is None else data


def write_json(file_path: str, data: Dict[str, Any], indent: int = 2, *, lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> None:
    """
    Atomically replace ``file_path`` with ``data`` serialised as JSON.

    The document is written to a temporary file in the same directory and
    moved into place under an exclusive lock. Errors propagate.
    """
    path_obj = Path(os.path.expanduser(file_path))
    path_obj.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = None
    try:
        with _file_lock(path_obj, exclusive=True, timeout=lock_timeout):
            with tempfile.NamedTemporaryFile(
                mode='w',
                dir=str(path_obj.parent),
                prefix='.tmp_',
                suffix='.json',
                delete=False,
                encoding='utf-8'
            ) as tmp_file:
                tmp_path = Path(tmp_file.name)
                json.dump(data, tmp_file, indent=indent, ensure_ascii=False, sort_keys=True)

            os.replace(str(tmp_path), str(path_obj))
    finally:
        if tmp_path and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass
