# endpoints/store_endpoints.py
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel

from docstore import AsyncDatabase, Database, StoreOptions
from settings import get_settings

router = APIRouter(prefix="/store", tags=["store"])
logger = logging.getLogger(__name__)


class WriteBody(BaseModel):
    value: Any


def open_store_from_settings() -> AsyncDatabase:
    settings = get_settings()
    db = Database(settings.store_path, StoreOptions.from_settings(settings))
    logger.info("STORE: opened %s (formatting=%s backups=%s)", db.location, settings.formatting, settings.backups)
    return AsyncDatabase(db)


def _store(request: Request) -> AsyncDatabase:
    # Opened on first use so importing the app never touches the filesystem.
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = open_store_from_settings()
        request.app.state.store = store
    return store


# -------------------------------------------------------------------
# READS
# -------------------------------------------------------------------
@router.get("")
async def read_all(request: Request) -> dict[str, Any]:
    return {"value": await _store(request).value()}


@router.get("/{path}/exists")
async def exists(request: Request, path: str) -> dict[str, Any]:
    return {"path": path, "exists": await _store(request).exists(path)}


@router.get("/{path}")
async def read(request: Request, path: str) -> dict[str, Any]:
    value = await _store(request).read(path)
    if value is None:
        raise HTTPException(status_code=404, detail=f"no value at {path}")
    return {"path": path, "value": value}


# -------------------------------------------------------------------
# WRITES
# -------------------------------------------------------------------
@router.put("/{path}")
async def write(request: Request, path: str, body: WriteBody) -> dict[str, Any]:
    store = _store(request)
    await store.write(path, body.value)
    return {"path": path, "value": await store.read(path)}


@router.delete("", status_code=204)
async def clear(request: Request) -> Response:
    await _store(request).clear()
    return Response(status_code=204)


@router.delete("/{key}", status_code=204)
async def delete(request: Request, key: str) -> Response:
    await _store(request).delete(key)
    return Response(status_code=204)
