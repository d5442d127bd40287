"""Map shadecore exceptions onto JSON error responses."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from shadecore.exceptions import (
    CatalogError,
    ConfigurationError,
    OrderAssemblyError,
    ShadeCoreError,
    ValidationError,
)

# Checked in order; the first matching base class wins
_STATUS_BY_TYPE: tuple[tuple[type[ShadeCoreError], int], ...] = (
    (ConfigurationError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (CatalogError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (OrderAssemblyError, status.HTTP_409_CONFLICT),
)


def status_for(exc: ShadeCoreError) -> int:
    for exc_type, code in _STATUS_BY_TYPE:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_body(error: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"error": error, "message": message, "details": details or {}}


async def shadecore_exception_handler(request: Request, exc: ShadeCoreError) -> JSONResponse:
    status_code = status_for(exc)
    # Client mistakes are expected traffic; only server-side failures are errors
    level = "ERROR" if status_code >= 500 else "WARNING"
    logger.log(
        level,
        "{method} {path} -> {status}: {type} {message}",
        method=request.method,
        path=request.url.path,
        status=status_code,
        type=type(exc).__name__,
        message=exc.message,
    )
    return JSONResponse(
        status_code=status_code,
        content=_error_body(type(exc).__name__, exc.message, exc.details),
    )


async def model_validation_exception_handler(request: Request, exc: PydanticValidationError) -> JSONResponse:
    """Model validation that happens inside a handler rather than on the request body."""
    logger.warning(
        "{path}: configuration rejected with {count} errors",
        path=request.url.path,
        count=exc.error_count(),
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(
            "ValidationError",
            "Invalid shade configuration",
            {"errors": exc.errors(include_url=False, include_context=False)},
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled exception on {path}", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(type(exc).__name__, "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShadeCoreError, shadecore_exception_handler)
    app.add_exception_handler(PydanticValidationError, model_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "status_for",
    "shadecore_exception_handler",
    "model_validation_exception_handler",
    "unhandled_exception_handler",
    "register_exception_handlers",
]
