"""
Global error handling.

Maps the shared exception taxonomy to HTTP status codes so that every
error response has the same JSON shape:

    {"error": <code>, "message": <text>, "details": {...}}
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import (
    IOUError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidOperationError,
    RateLimitError,
    ExternalServiceError,
)

logger = logging.getLogger(__name__)

# Most specific first; the first matching base wins.
STATUS_BY_ERROR: list[tuple[type[IOUError], int]] = [
    (RateLimitError, status.HTTP_429_TOO_MANY_REQUESTS),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidOperationError, status.HTTP_400_BAD_REQUEST),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY),
]


def status_for(exc: IOUError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_iou_error(request: Request, exc: IOUError) -> JSONResponse:
    """Handle any error from the shared taxonomy.

    Args:
        request: The incoming request
        exc: The raised domain error

    Returns:
        JSONResponse with the error's code, message and details
    """
    status_code = status_for(exc)
    headers = None

    if isinstance(exc, RateLimitError):
        headers = {"Retry-After": str(exc.retry_after_seconds)}
        logger.warning("Rate limited on %s %s", request.method, request.url.path)
    elif isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    elif status_code >= 500:
        logger.error("%s on %s: %s", exc.code, request.url.path, exc.message)

    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle Pydantic request validation errors as a 400."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(x) for x in error.get("loc", []) if x != "body")
        messages.append(f"{field}: {error.get('msg', 'Invalid value')}")

    logger.info("Validation error on %s", request.url.path)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "VALIDATION_ERROR",
            "message": " | ".join(messages) or "Invalid request",
            "details": {},
        },
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without exposing internals."""
    extra = {"error_type": type(exc).__name__, "path": request.url.path, "method": request.method}
    logger.exception("Unexpected error on %s", request.url.path, extra=extra)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "INTERNAL_ERROR",
            "message": "Internal server error",
            "details": {},
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(IOUError, handle_iou_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_error)
