from __future__ import annotations

import threading
from pathlib import Path


class StoreLockRegistry:
    """
    Hands out one re-entrant lock per resolved backing file.

    Two handles opened on the same file in one process share the lock, and the
    backup thread takes the same lock as foreground writes.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def lock_for(self, path: Path) -> threading.RLock:
        key = str(path.resolve())
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock


STORE_LOCKS = StoreLockRegistry()
