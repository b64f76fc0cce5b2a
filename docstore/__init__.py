from __future__ import annotations

from .backups import LAST_BACKUP_KEY, BackupScheduler
from .document import Database
from .errors import (
    BackupError,
    ConfigError,
    InvalidValueError,
    PersistenceError,
    StoreError,
    StoreKeyError,
)
from .options import BACKUP_INTERVALS, StoreOptions
from .repositories import AsyncDatabase

__all__ = [
    "Database",
    "AsyncDatabase",
    "BackupScheduler",
    "StoreOptions",
    "BACKUP_INTERVALS",
    "LAST_BACKUP_KEY",
    "StoreError",
    "ConfigError",
    "StoreKeyError",
    "InvalidValueError",
    "PersistenceError",
    "BackupError",
]
