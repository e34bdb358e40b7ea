"""Mapping of registry errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shortlinks.errors import (
    AllocationError,
    ConflictError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger("shortlinks.web")


async def validation_error_handler(request: Request, exc: ValidationError):
    """Creation rejected by a validation rule."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.message, "detail": exc.rule.value},
    )


async def conflict_error_handler(request: Request, exc: ConflictError):
    """Identifier or alias already taken."""
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"error": str(exc), "detail": "conflict"},
    )


async def backend_error_handler(request: Request, exc: Exception):
    """Store failures surface without internal detail."""
    logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": "Service temporarily unavailable", "detail": None},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the registry error handlers on an app."""
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ConflictError, conflict_error_handler)
    app.add_exception_handler(AllocationError, backend_error_handler)
    app.add_exception_handler(StorageError, backend_error_handler)
