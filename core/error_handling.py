"""
Request-level error translation and correlation ids.

This is the only place that decides transport status codes. Services raise
HttpError subclasses (or let foreign exceptions escape); everything is turned
into ``{"error": ..., "message": ...}`` here.
"""

import uuid
from http import HTTPStatus
from typing import Any, Callable, Dict, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .exceptions import ErrorKind, HttpError
from .logging_config import correlation_id_var, get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Status and category per failure kind
KIND_STATUS: Dict[ErrorKind, Tuple[int, str]] = {
    ErrorKind.NOT_FOUND: (404, "Not Found"),
    ErrorKind.CONFLICT: (409, "Conflict"),
    ErrorKind.UNAUTHORIZED: (401, "Unauthorized"),
    ErrorKind.PERSISTENCE_FAILURE: (500, "Conflict"),
    ErrorKind.UNEXPECTED: (500, "Internal Server Error"),
}


def translate_exception(exc: BaseException) -> Tuple[int, Dict[str, str]]:
    """Maps any exception to a status code and error body."""
    if isinstance(exc, HttpError):
        status_code, error = KIND_STATUS[exc.kind]
        return status_code, {"error": error, "message": exc.message or error}

    status_code, error = KIND_STATUS[ErrorKind.UNEXPECTED]
    return status_code, {"error": error, "message": str(exc) or type(exc).__name__}


def error_response(exc: BaseException) -> JSONResponse:
    status_code, body = translate_exception(exc)
    return JSONResponse(status_code=status_code, content=body)


class ExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """Catches anything the route handlers did not turn into a response."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
            return error_response(exc)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Reuses the caller's correlation id or creates one, and echoes it back."""

    def __init__(self, app, header_name: str = CORRELATION_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        correlation_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        token = correlation_id_var.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)

        response.headers[self.header_name] = correlation_id
        return response


async def http_error_handler(request: Request, exc: HttpError) -> JSONResponse:
    # Failed writes are already logged by the service that wrapped them
    if exc.kind == ErrorKind.UNEXPECTED:
        logger.error("%s on %s %s", type(exc).__name__, request.method, request.url.path,
                     exc_info=exc.original or exc)
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content={"error": "Unprocessable Entity", "message": details or "Invalid request"},
    )


async def starlette_http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    error = HTTPStatus(exc.status_code).phrase
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error, "message": str(exc.detail) or error},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI, correlation_header: str = CORRELATION_HEADER) -> None:
    """Installs the translation boundary on app. Call once while building it."""
    app.add_exception_handler(HttpError, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, starlette_http_error_handler)
    # Added last so the correlation middleware wraps the exception middleware
    app.add_middleware(ExceptionHandlerMiddleware)
    app.add_middleware(CorrelationIdMiddleware, header_name=correlation_header)
