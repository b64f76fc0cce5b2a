from __future__ import annotations

from pathlib import Path
from typing import Any

from json_store import Formatting, atomic_write_json, read_json

from .errors import PersistenceError
from .interfaces import KeyValueDocumentStore
from .locks import STORE_LOCKS


class DiskJsonDocumentStore(KeyValueDocumentStore):
    """
    Stores a single JSON object on disk at a fixed path.

    - Always returns a dict (empty dict on missing/invalid JSON or a non-object document).
    - Writes atomically, in the configured formatting.
    """

    def __init__(self, path: Path, *, formatting: Formatting = "compact"):
        self._path = path
        self._formatting = formatting

    @property
    def path(self) -> Path:
        return self._path

    @property
    def formatting(self) -> Formatting:
        return self._formatting

    def load(self) -> dict[str, Any]:
        with STORE_LOCKS.lock_for(self._path):
            raw = read_json(self._path)
            return raw if isinstance(raw, dict) else {}

    def save(self, doc: dict[str, Any]) -> None:
        with STORE_LOCKS.lock_for(self._path):
            try:
                atomic_write_json(self._path, doc, formatting=self._formatting)
            except OSError as e:
                raise PersistenceError(f"failed to write {self._path}: {e}") from e
