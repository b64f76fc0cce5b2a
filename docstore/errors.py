from __future__ import annotations


class StoreError(Exception):
    """Base class for every error raised by the store."""


class ConfigError(StoreError, ValueError):
    """Bad construction arguments: location, formatting, backup cadence."""


class StoreKeyError(StoreError, KeyError):
    """Invalid path, key, or argument shape passed to read/write/delete."""

    def __str__(self) -> str:
        # KeyError.__str__ reprs the message; keep it readable.
        return str(self.args[0]) if self.args else ""


class InvalidValueError(StoreError, ValueError):
    """Value cannot be represented as JSON."""


class PersistenceError(StoreError, OSError):
    """Writing the backing file failed."""


class BackupError(StoreError):
    """A snapshot could not be written to the backup directory."""
