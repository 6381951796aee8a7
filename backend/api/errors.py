"""
Exception handlers.

Maps service exceptions to HTTP status codes. Client errors carry the
exception's code and message; server errors are logged with their
traceback and answered with a generic body.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from modules.billing.exceptions import (
    WebhookPayloadTooLargeError,
    WebhookVerificationError,
)
from shared.exceptions import (
    ServiceError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from .models.errors import ErrorResponse, INTERNAL_ERROR

logger = logging.getLogger(__name__)

# Checked in order; the first matching base class wins
ERROR_STATUS_CODES: list[tuple[type[ServiceError], int]] = [
    (WebhookPayloadTooLargeError, 413),
    (WebhookVerificationError, 400),
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
]


def status_code_for(exc: ServiceError) -> int:
    """Get the HTTP status code for a service exception."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Handle every ServiceError raised by a route."""
    status_code = status_code_for(exc)

    if status_code >= 500:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
        return JSONResponse(status_code=status_code, content=INTERNAL_ERROR.model_dump())

    logger.warning(
        "%s %s rejected with %d: %s",
        request.method,
        request.url.path,
        status_code,
        exc.code,
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed JSON bodies and non-numeric path IDs are client errors (400)."""
    body = ErrorResponse(
        error="INVALID_REQUEST",
        message="Invalid request",
        details={"errors": jsonable_encoder(exc.errors())},
    )
    return JSONResponse(status_code=400, content=body.model_dump())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for database and other infrastructure errors."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=INTERNAL_ERROR.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the app."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
