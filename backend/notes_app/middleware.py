"""Request logging and the translation of failures into JSON error bodies."""
from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from jose import ExpiredSignatureError, JWTError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import Match

from notes_app.storage.errors import CastError, DocumentValidationError, DuplicateKeyError

logger = logging.getLogger(__name__)


async def request_logger(request: Request, call_next):
    # bodies are not logged: signup and login carry passwords
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


def _error(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "validation failed"


async def cast_error_handler(request: Request, exc: CastError):
    logger.error(str(exc))
    return _error(status.HTTP_400_BAD_REQUEST, "malformatted id")


async def document_validation_handler(request: Request, exc: DocumentValidationError):
    logger.error(str(exc))
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = _validation_message(exc)
    logger.error(message)
    return _error(status.HTTP_400_BAD_REQUEST, message)


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
    logger.error(str(exc))
    return _error(status.HTTP_400_BAD_REQUEST, f"{exc.key} must be unique")


async def token_error_handler(request: Request, exc: JWTError):
    logger.error(str(exc))
    if isinstance(exc, ExpiredSignatureError):
        return _error(status.HTTP_401_UNAUTHORIZED, "token expired")
    return _error(status.HTTP_401_UNAUTHORIZED, "invalid token")


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    logger.error(str(exc.detail))
    return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def unknown_endpoint(request: Request):
    path = request.url.path
    if path != "/" and path.endswith("/"):
        # "/api/notes/" is the same resource as "/api/notes"
        scope = {**request.scope, "path": path.rstrip("/") or "/"}
        for route in request.app.router.routes:
            if getattr(route, "endpoint", None) is unknown_endpoint:
                continue
            match, _ = route.matches(scope)
            if match != Match.NONE:
                return RedirectResponse(
                    request.url.replace(path=scope["path"]), status_code=status.HTTP_307_TEMPORARY_REDIRECT
                )
    return _error(status.HTTP_404_NOT_FOUND, "unknown endpoint")


def register_error_handlers(app: FastAPI) -> None:
    # anything not listed here falls through to the default 500 handler
    app.add_exception_handler(CastError, cast_error_handler)
    app.add_exception_handler(DocumentValidationError, document_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
    app.add_exception_handler(JWTError, token_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
