"""Global exception handlers for the HTTP facade.

Every error body has the shape ``{"error": <message>}``.

- ValidationError, InsufficientStockError -> 400
- NotFoundError -> 404
- RequestValidationError (malformed body) -> 400
- StoreError and anything unexpected -> 500 with a generic message;
  the detail only goes to the server log.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stockroom.domain.exceptions import DomainException, NotFoundError, StoreError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def status_for(exc: DomainException) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    # ValidationError, InsufficientStockError: the caller must change the request.
    return status.HTTP_400_BAD_REQUEST


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(DomainException)
    async def domain_error_handler(request: Request, exc: DomainException):
        logger.warning(
            "%s on %s: %s",
            type(exc).__name__,
            request.url.path,
            exc,
            extra={"path": request.url.path, "error_code": type(exc).__name__},
        )
        return error_response(status_for(exc), str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("Invalid request body on %s: %s", request.url.path, exc.errors())
        return error_response(
            status.HTTP_400_BAD_REQUEST, _describe_validation_errors(exc),
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(
            "Store failure on %s: %s",
            request.url.path,
            exc,
            exc_info=exc,
            extra={"path": request.url.path, "error_code": "StoreError"},
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            "Unhandled exception on %s: %s", request.url.path, exc, exc_info=exc,
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        # Drop the leading "body" segment FastAPI adds to every location.
        loc = [str(p) for p in error.get("loc", ()) if p != "body"]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "invalid request: " + "; ".join(parts)
