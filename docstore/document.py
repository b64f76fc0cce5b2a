from __future__ import annotations

import copy
import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from .backups import LAST_BACKUP_KEY, BackupScheduler, parse_timestamp, write_backup_file
from .disk_store import DiskJsonDocumentStore
from .errors import ConfigError, InvalidValueError, StoreKeyError
from .locks import STORE_LOCKS
from .options import StoreOptions, coerce_options
from .paths import default_backup_dir

logger = logging.getLogger(__name__)

_MISSING: Any = object()


def split_path(path: Any) -> list[str]:
    """'a.b.c' -> ['a', 'b', 'c']. Numeric segments stay string keys."""
    if not isinstance(path, str) or not path:
        raise StoreKeyError("Please send a valid key: a non-empty dotted string.")
    parts = path.split(".")
    if any(p == "" for p in parts):
        raise StoreKeyError(f"Invalid key {path!r}: empty path segment.")
    return parts


def resolve(tree: Mapping[str, Any], parts: Iterable[str]) -> Any | None:
    node: Any = tree
    for part in parts:
        if isinstance(node, dict) and part in node:
            node = node[part]
        else:
            return None
    return node


def _is_blank_scalar(value: Any) -> bool:
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or value != value
    return False


def _to_json_value(value: Any) -> Any:
    # Validates and detaches the caller's object from the tree in one go.
    try:
        return json.loads(json.dumps(value, allow_nan=False))
    except (TypeError, ValueError) as e:
        raise InvalidValueError(f"value is not JSON-serializable: {e}") from e


class Database:
    """
    A JSON file mirrored in memory and addressed with dotted paths.

        db = Database("./db.json", {"formatting": "expanded", "backups": "daily"})
        db.write("site.name", "google")
        db.read("site.name")     # "google"
        db.exists("site.url")    # False
        db.delete(["site"])

    Every mutation rewrites the whole file before returning.
    """

    def __init__(
        self,
        location: str | os.PathLike[str] | None,
        options: StoreOptions | Mapping[str, Any] | None = None,
        *,
        clock: Callable[[], float] = time.time,
        **overrides: Any,
    ):
        if location is None or (isinstance(location, str) and not location.strip()):
            raise ConfigError("Argument missing. Please put a location when creating a database.")
        if not isinstance(location, (str, os.PathLike)):
            raise ConfigError(f"location must be a path, got {type(location).__name__}")

        self._options = coerce_options(options, **overrides)
        self._location = Path(location)
        self._disk = DiskJsonDocumentStore(self._location, formatting=self._options.formatting)
        self._lock = STORE_LOCKS.lock_for(self._location)

        with self._lock:
            self._tree: dict[str, Any] = self._disk.load()
            self._disk.save(self._tree)
        logger.debug("DOCSTORE OPEN: %s (%d top-level keys)", self._location, len(self._tree))

        self._backups: BackupScheduler | None = None
        interval = self._options.backup_interval
        if interval is not None:
            self._backups = BackupScheduler(self, interval, clock=clock, name=f"docstore-backups:{self.name}")
            try:
                self._backups.start()
            except Exception:
                self._backups.close()
                raise

    # -- properties ---------------------------------------------------

    @property
    def location(self) -> Path:
        return self._location

    @property
    def name(self) -> str:
        return self._location.name

    @property
    def options(self) -> StoreOptions:
        return self._options

    @property
    def backups(self) -> BackupScheduler | None:
        return self._backups

    @property
    def backup_directory(self) -> Path:
        return self._options.backup_directory or default_backup_dir(self._location)

    # -- reads --------------------------------------------------------

    def read(self, path: str) -> Any | None:
        parts = split_path(path)
        with self._lock:
            return copy.deepcopy(resolve(self._tree, parts))

    def exists(self, path: str) -> bool:
        # Falsy values (0, "", False, empty containers) report False, same as absent keys.
        # Malformed paths never raise here; they simply do not exist.
        try:
            return bool(self.read(path))
        except StoreKeyError:
            return False

    def value(self) -> dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._tree)

    # -- writes -------------------------------------------------------

    def write(self, path: str, value: Any = _MISSING) -> None:
        parts = split_path(path)
        if value is _MISSING:
            raise StoreKeyError("Please send a valid key and a value to set.")
        if self._options.strict_values and _is_blank_scalar(value):
            raise StoreKeyError("Please send a valid key and a value to set.")
        leaf = _to_json_value(value)

        if self._backups is not None:
            self._backups.check()

        with self._lock:
            self._check_writable(path, parts)
            node = self._tree
            for part in parts[:-1]:
                child = node.get(part)
                if not isinstance(child, dict):
                    child = node[part] = {}
                node = child
            node[parts[-1]] = leaf
            self._persist()

    def clear(self) -> None:
        with self._lock:
            self._tree = {}
            self._persist()

    def delete(self, keys: str | list[str] | tuple[str, ...]) -> None:
        if isinstance(keys, str):
            if not keys:
                raise StoreKeyError("Please send a valid key to delete")
            targets = [keys]
        elif isinstance(keys, (list, tuple)):
            if not all(isinstance(k, str) and k for k in keys):
                raise StoreKeyError("Please send a valid key to delete")
            targets = list(keys)
        else:
            raise StoreKeyError("Please send a valid key to delete")

        with self._lock:
            for key in targets:
                # Top-level only: "a.b" is a literal key here, not a path.
                self._tree.pop(key, None)
            self._persist()

    # -- backups ------------------------------------------------------

    def last_backup(self) -> int | None:
        with self._lock:
            return parse_timestamp(self._tree.get(LAST_BACKUP_KEY))

    def snapshot(self, timestamp_ms: int) -> Path:
        """Write a backup file for `timestamp_ms` and record it under LAST_BACKUP."""
        with self._lock:
            doc = dict(self._tree)
            doc[LAST_BACKUP_KEY] = int(timestamp_ms)
            target = write_backup_file(
                doc,
                backup_dir=self.backup_directory,
                location=self._location,
                timestamp_ms=timestamp_ms,
                formatting=self._options.formatting,
            )
            self._tree[LAST_BACKUP_KEY] = int(timestamp_ms)
            self._persist()
        logger.info("BACKUP: wrote %s", target)
        return target

    # -- lifecycle ----------------------------------------------------

    def close(self) -> None:
        if self._backups is not None:
            self._backups.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Database({str(self._location)!r}, formatting={self._options.formatting!r}, backups={self._options.backups!r})"

    def _persist(self) -> None:
        self._disk.save(self._tree)

    def _check_writable(self, path: str, parts: list[str]) -> None:
        # Missing or null parents get created; any other scalar/list in the way is an error.
        node: Any = self._tree
        for depth, part in enumerate(parts[:-1]):
            child = node.get(part)
            if child is None:
                return
            if not isinstance(child, dict):
                crossed = ".".join(parts[: depth + 1])
                raise StoreKeyError(f"Cannot write {path!r}: {crossed!r} is not an object.")
            node = child
