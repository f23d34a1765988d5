# app/core/errors.py
from __future__ import annotations

import logging
from typing import Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from app.core.envelope import fail

log = logging.getLogger(__name__)


class MissingFieldsError(ValueError):
    """Required payload fields absent; nothing was written."""

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class PendingProjectNotFound(LookupError):
    def __init__(self, pending_id: str):
        self.pending_id = pending_id
        super().__init__("Pending project not found")


class UploadError(RuntimeError):
    """Upload rejected (wrong type, too large) or could not be written."""


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def install_exception_handlers(app: FastAPI) -> None:
    """
    Every error leaves the API as {status: false, message}.
    Database and upload failures surface their raw message with a 500.
    """

    @app.exception_handler(HTTPException)
    async def _http(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _invalid(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content=fail(_validation_message(exc)))

    @app.exception_handler(MissingFieldsError)
    async def _missing(request: Request, exc: MissingFieldsError):
        return JSONResponse(status_code=400, content=fail(str(exc)))

    @app.exception_handler(PendingProjectNotFound)
    async def _pending_missing(request: Request, exc: PendingProjectNotFound):
        return JSONResponse(status_code=404, content=fail(str(exc)))

    @app.exception_handler(SQLAlchemyError)
    async def _db(request: Request, exc: SQLAlchemyError):
        log.exception("database error", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content=fail(f"Server Error: {exc}"))

    @app.exception_handler(UploadError)
    async def _upload(request: Request, exc: UploadError):
        log.warning("upload failed", extra={"path": request.url.path, "error": str(exc)})
        return JSONResponse(status_code=500, content=fail(f"Server Error: {exc}"))

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        log.exception("unhandled error", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content=fail(f"Server Error: {exc}"))
