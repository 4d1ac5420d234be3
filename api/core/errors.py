"""
JSON error rendering.

Every error response body is `{"error": "<short message>"}`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .db import StoreError

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def validation_message(exc: RequestValidationError) -> str:
    fields: list[str] = []
    for err in exc.errors():
        loc = [part for part in err.get("loc", ()) if isinstance(part, str) and part not in ("body", "query", "path")]
        name = loc[-1] if loc else "body"
        if name not in fields:
            fields.append(name)
    if not fields:
        return "Invalid input"
    return "Invalid input or missing " + ", ".join(f"'{name}'" for name in fields)


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = _error(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, validation_message(exc))


async def store_exception_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("store_error method=%s path=%s error=%s", request.method, request.url.path, exc)
    return _error(500, "Database error")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StoreError, store_exception_handler)
