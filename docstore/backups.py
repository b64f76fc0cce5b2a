"""
Periodic snapshots of a store into a backup directory.

The scheduler keeps no timestamp of its own: it asks its target for the
LAST_BACKUP value recorded in the tree, so a restarted process picks up the
cadence where the previous one left off.
"""
from __future__ import annotations

import logging
import math
import threading
import time
from pathlib import Path
from typing import Any, Callable

from json_store import Formatting, dumps_json

from .errors import BackupError, StoreError
from .interfaces import SnapshotTarget
from .paths import backup_file, ensure_dir

logger = logging.getLogger(__name__)

LAST_BACKUP_KEY = "LAST_BACKUP"


def parse_timestamp(raw: Any) -> int | None:
    """LAST_BACKUP may be stored as an int or a numeric string; anything else counts as absent."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and math.isfinite(raw):
        return int(raw)
    if isinstance(raw, str) and raw.strip():
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def write_backup_file(
    doc: dict[str, Any],
    *,
    backup_dir: Path,
    location: Path,
    timestamp_ms: int,
    formatting: Formatting = "compact",
) -> Path:
    target = backup_file(backup_dir, location, timestamp_ms)
    try:
        if backup_dir.exists() and not backup_dir.is_dir():
            raise NotADirectoryError(f"{backup_dir} is not a directory")
        ensure_dir(backup_dir)
        target.write_text(dumps_json(doc, formatting=formatting), encoding="utf-8")
    except OSError as e:
        raise BackupError(f"failed to write backup {target}: {e}") from e
    return target


class BackupScheduler:
    """
    Snapshots `target` every `interval` seconds on a daemon thread.

    start() decides from the target's last backup whether to snapshot right
    away (synchronously, so a broken backup directory surfaces to the caller)
    or to wait out the rest of the interval. close() stops the thread.
    """

    def __init__(
        self,
        target: SnapshotTarget,
        interval: float,
        *,
        clock: Callable[[], float] = time.time,
        name: str = "docstore-backups",
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._target = target
        self._interval = float(interval)
        self._clock = clock
        self._name = name
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

        self.next_delay: float | None = None
        self.last_error: StoreError | None = None
        self.snapshots_taken = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def last_backup(self) -> int | None:
        return self._target.last_backup()

    def now_ms(self) -> int:
        return int(self._clock() * 1000)

    def elapsed(self, now_ms: int) -> float:
        """Seconds since the last snapshot; inf when there has never been one."""
        last = self._target.last_backup()
        if last is None:
            return math.inf
        return (now_ms - last) / 1000.0

    def delay_until_due(self, now_ms: int) -> float:
        elapsed = self.elapsed(now_ms)
        if elapsed >= self._interval:
            return 0.0
        # A timestamp from the future never pushes the next run past one interval.
        return self._interval - max(elapsed, 0.0)

    def run_once(self) -> int:
        ts = self.now_ms()
        self._target.snapshot(ts)
        self.snapshots_taken += 1
        return ts

    def check(self) -> bool:
        """Snapshot now if the interval has elapsed. Returns True when one was taken."""
        if self._stop.is_set():
            return False
        if self.delay_until_due(self.now_ms()) > 0:
            return False
        self.run_once()
        return True

    def start(self) -> None:
        if self._thread is not None:
            return
        delay = self.delay_until_due(self.now_ms())
        if delay == 0:
            self.run_once()
            delay = self._interval
        self.next_delay = delay
        logger.debug("BACKUP: next snapshot in %.1fs (interval=%ss)", delay, self._interval)

        self._thread = threading.Thread(target=self._run, args=(delay,), name=self._name, daemon=True)
        self._thread.start()

    def _run(self, delay: float) -> None:
        while not self._stop.wait(delay):
            try:
                if self.delay_until_due(self.now_ms()) == 0:
                    self.run_once()
            except StoreError as e:
                self.last_error = e
                logger.error("BACKUP: snapshot failed: %s", e)
                delay = self._interval
            else:
                delay = self.delay_until_due(self.now_ms()) or self._interval
            self.next_delay = delay

    def close(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
