"""Exception handler: ogni errore esce nell'envelope {"status", "error"}."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .web import ApiError, failure

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return failure(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Body non decodificabile o con tipi sbagliati."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else str(exc)
    logger.warning("Body non valido su %s: %s", request.url.path, errors)
    return failure(400, "invalid json")


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = getattr(exc, "status_code", 500)
    detail = getattr(exc, "detail", str(exc))
    return JSONResponse(
        status_code=status_code,
        content={"status": status_code, "error": str(detail).lower()},
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s: %s", request.method, request.url.path, exc,
        exc_info=exc,
    )
    return failure(500, "internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
