from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from api.core.config import Settings, get_settings
from api.core.log_config import configure_logging
from api.repositories.errors import StorageError
from api.repositories.filedb import Database
from api.routers import entries as entries_router
from api.routers import lists as lists_router
from api.routers.validation import (
    UnsupportedMediaTypeError,
    unsupported_media_type_response,
    validation_error_response,
)
from api.services.entry_service import EntryService
from api.services.errors import NotFoundError
from api.services.list_service import ListService

log = logging.getLogger(__name__)


class TrimSlashMiddleware(BaseHTTPMiddleware):
    """Permanently redirect ``/path/`` to ``/path`` (query string kept)."""

    async def dispatch(self, request, call_next):
        path = request.url.path
        if path != "/" and path.endswith("/"):
            target = path.rstrip("/") or "/"
            if request.url.query:
                target = f"{target}?{request.url.query}"
            return RedirectResponse(target, status_code=308)
        return await call_next(request)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(StorageError)
    async def _storage_failure(request: Request, exc: StorageError):
        log.error("storage failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        return validation_error_response(exc)

    @app.exception_handler(UnsupportedMediaTypeError)
    async def _unsupported_media(request: Request, exc: UnsupportedMediaTypeError):
        return unsupported_media_type_response()


def create_app(settings: Optional[Settings] = None, db: Optional[Database] = None) -> FastAPI:
    """Factory compatible with uvicorn (``--factory``). Opens the database once."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    if db is None:
        db = Database.open(Path(settings.data_dir))

    app = FastAPI(title="Todo List API")
    app.state.settings = settings
    app.state.list_service = ListService(db)
    app.state.entry_service = EntryService(db)

    app.add_middleware(TrimSlashMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)

    prefix = settings.api_path_prefix
    app.include_router(lists_router.router, prefix=prefix)
    app.include_router(entries_router.router, prefix=prefix)

    @app.get("/healthz")
    def health():
        return {"status": "ok"}

    log.info("todo API ready (data dir %s, prefix %r)", db.directory, prefix or "/")
    return app
