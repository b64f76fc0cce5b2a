from __future__ import annotations

from typing import Any, Protocol


class KeyValueDocumentStore(Protocol):
    """
    Minimal interface for the backing resource: one JSON object persisted as a whole.
    """

    def load(self) -> dict[str, Any]:
        """Load and return the full document (never None)."""
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Persist the full document atomically."""
        ...


class SnapshotTarget(Protocol):
    """What the backup scheduler needs from the store it snapshots."""

    def last_backup(self) -> int | None:
        ...

    def snapshot(self, timestamp_ms: int) -> None:
        ...
