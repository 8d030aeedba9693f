"""
Global exception handlers.

Every error leaves the API as {"error": "..."}; structured details
(e.g. needsVerification) are passed through as the HTTPException detail dict.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from skillshub.services.storage import StorageNotConfiguredError

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail}

    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")

    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation failures map to 400 with the first problem found."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        blank = isinstance(first.get("input"), str) and not first["input"].strip()
        if first.get("type") == "missing" or blank:
            message = "Missing required fields"
        else:
            field = ".".join(str(p) for p in first.get("loc", ())[1:])
            message = f"{field}: {first.get('msg')}" if field else first.get("msg", message)

    logger.warning(f"Validation error on {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def storage_exception_handler(request: Request, exc: StorageNotConfiguredError):
    logger.error(f"Storage not configured - Request: {request.method} {request.url.path}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})


async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unexpected error: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StorageNotConfiguredError, storage_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
