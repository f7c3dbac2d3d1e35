"""Mapping of domain exceptions to HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cueline.config import get_logger
from cueline.exceptions import CueLineError, NotFoundError, ValidationError

logger = get_logger(__name__)


def _field_name(loc: tuple[int | str, ...]) -> str:
    """Turn a pydantic error location into a field name ("body" is dropped)."""
    parts = [str(part) for part in loc if part not in ("body", "path", "query")]
    return ".".join(parts) or "body"


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """Domain validation failures become 400 with per-field messages."""
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message, "errors": exc.field_errors},
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies also become 400 with per-field messages."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(tuple(error.get("loc", ()))), []).append(
            str(error.get("msg", "Invalid value"))
        )
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": errors},
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": exc.message})


async def internal_error_handler(request: Request, exc: CueLineError) -> JSONResponse:
    """Storage and filesystem failures are logged and hidden from the caller."""
    logger.error(
        "Request failed",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the CueLine error handlers on ``app``."""
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(CueLineError, internal_error_handler)
