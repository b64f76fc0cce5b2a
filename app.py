from __future__ import annotations

import contextlib
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dotenv import load_dotenv

from docstore import AsyncDatabase, Database, StoreError
from docstore.errors import InvalidValueError, StoreKeyError

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    store = getattr(app.state, "store", None)
    if store is not None:
        await store.close()


def create_app(db: Database | None = None) -> FastAPI:
    load_dotenv("local.env")

    from endpoints.store_endpoints import router as store_router

    app = FastAPI(lifespan=lifespan)
    app.state.store = AsyncDatabase(db) if db is not None else None

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        if isinstance(exc, (StoreKeyError, InvalidValueError)):
            status = 400
        else:
            logger.warning("STORE: %s %s failed: %s", request.method, request.url.path, exc)
            status = 500
        return JSONResponse({"detail": str(exc)}, status_code=status)

    @app.get("/health")
    async def health():
        return JSONResponse({"ok": True})

    app.include_router(store_router)

    return app


app = create_app()
