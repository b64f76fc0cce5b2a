from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_optional(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


@dataclass(frozen=True)
class Settings:
    # Backing file
    store_path: str
    formatting: str

    # Backups (disabled unless a cadence is set)
    backups: str | None
    backup_directory: str | None

    # Legacy: reject falsy values on write
    strict_values: bool


def get_settings() -> Settings:
    store_path = os.getenv("DOCSTORE_PATH", "data/db.json").strip() or "data/db.json"
    formatting = os.getenv("DOCSTORE_FORMATTING", "compact").strip().lower()

    backups = _env_optional("DOCSTORE_BACKUPS")
    backup_directory = _env_optional("DOCSTORE_BACKUP_DIR")

    strict_values = _env_bool("DOCSTORE_STRICT_VALUES", False)

    return Settings(
        store_path=store_path,
        formatting=formatting,
        backups=backups,
        backup_directory=backup_directory,
        strict_values=strict_values,
    )
