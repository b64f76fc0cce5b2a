from __future__ import annotations

from pathlib import Path

BACKUP_SUFFIX = "_BACKUP_"


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def store_stem(location: Path) -> str:
    # db.json -> db, notes -> notes
    name = location.name
    return name[: -len(".json")] if name.lower().endswith(".json") and len(name) > 5 else name


def default_backup_dir(location: Path) -> Path:
    return location.parent / "backups"


def backup_file(backup_dir: Path, location: Path, timestamp_ms: int) -> Path:
    return backup_dir / f"{store_stem(location)}{BACKUP_SUFFIX}{int(timestamp_ms)}.json"
