"""
Module: core.utils.file_locking

Purpose:
    Cross-platform locked output for build artifacts. Independent packing
    passes may run in parallel; when two of them target the same output
    path the writes must not interleave.

Key Functions:
    - locked_file: Context manager for locked binary file access
    - locked_write_bytes: Replace a file's content under an exclusive lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - bundle.strategies: Writing <product>.icns
    - cli: `pack` command output
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Generator

import portalocker

logger = logging.getLogger(__name__)


@contextmanager
def locked_file(
    path: Path,
    mode: str = 'r+b',
    lock_type: int = portalocker.LOCK_EX,
) -> Generator[BinaryIO, None, None]:
    """
    Context manager for cross-platform locked binary file access.

    Args:
        path: Path to file. Parent directories are created.
        mode: Binary open mode ('rb', 'r+b', 'ab').
        lock_type: LOCK_EX for exclusive, LOCK_SH for shared.

    Yields:
        Open file handle with lock held.

    Example:
        >>> with locked_file(path) as f:
        ...     f.write(b'icns')
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    # r+b needs an existing file; create it without truncating a concurrent writer's data
    if 'r' in mode and not path.exists():
        path.touch()

    with open(path, mode) as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


def locked_write_bytes(path: Path, data: bytes) -> int:
    """
    Replace the content of path with data while holding an exclusive lock.

    Truncation happens after the lock is acquired, so a reader holding a
    shared lock never observes a half-written file.

    Returns:
        Number of bytes written.

    Raises:
        OSError: If the file cannot be opened or written.
    """
    with locked_file(path, 'r+b', portalocker.LOCK_EX) as f:
        f.seek(0)
        f.truncate()
        f.write(data)
        f.flush()

    logger.debug(f"Wrote {len(data)} bytes to {path.name}")
    return len(data)
