from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Any, Mapping

from .document import _MISSING, Database
from .options import StoreOptions


class AsyncDatabase:
    """
    Async wrapper around a Database.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(
        self,
        location: Database | str | os.PathLike[str],
        options: StoreOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> None:
        if isinstance(location, Database):
            self._db = location
        else:
            self._db = Database(location, options, **overrides)

    @property
    def database(self) -> Database:
        return self._db

    @property
    def location(self) -> Path:
        return self._db.location

    async def read(self, path: str) -> Any | None:
        return await asyncio.to_thread(self._db.read, path)

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self._db.exists, path)

    async def write(self, path: str, value: Any = _MISSING) -> None:
        await asyncio.to_thread(self._db.write, path, value)

    async def value(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._db.value)

    async def clear(self) -> None:
        await asyncio.to_thread(self._db.clear)

    async def delete(self, keys: str | list[str] | tuple[str, ...]) -> None:
        await asyncio.to_thread(self._db.delete, keys)

    async def close(self) -> None:
        await asyncio.to_thread(self._db.close)
