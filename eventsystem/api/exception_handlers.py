"""Global exception handlers that map domain exceptions to HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from eventsystem.errors import (
    BOOKING_CONFLICT,
    DUPLICATE_RESOURCE,
    HAS_DEPENDENCIES,
    INVALID_SIZE,
    INVALID_TYPE,
    NOT_FOUND,
    STORAGE_UNAVAILABLE,
    VALIDATION_ERROR,
    BookingConflictError,
    DependencyError,
    DomainValidationError,
    DuplicateResourceError,
    InvalidSizeError,
    InvalidTypeError,
    NotFoundError,
    StorageFaultError,
)
from eventsystem.schemas.error import ErrorResponse
from eventsystem.services.storage import STORAGE_FAULT_MESSAGE

logger = logging.getLogger(__name__)


def _error_response(status_code: int, detail: str, code: str) -> JSONResponse:
    """Return a standardized error response with detail and machine-readable code."""
    body = ErrorResponse(detail=detail, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def domain_validation_error_handler(
    _request: Request, exc: DomainValidationError
) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        str(exc),
        VALIDATION_ERROR,
    )


def invalid_size_error_handler(_request: Request, exc: InvalidSizeError) -> JSONResponse:
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc), INVALID_SIZE)


def invalid_type_error_handler(_request: Request, exc: InvalidTypeError) -> JSONResponse:
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc), INVALID_TYPE)


def duplicate_resource_error_handler(
    _request: Request, exc: DuplicateResourceError
) -> JSONResponse:
    return _error_response(
        status.HTTP_409_CONFLICT,
        str(exc),
        DUPLICATE_RESOURCE,
    )


def booking_conflict_error_handler(
    _request: Request, exc: BookingConflictError
) -> JSONResponse:
    return _error_response(status.HTTP_409_CONFLICT, str(exc), BOOKING_CONFLICT)


def dependency_error_handler(_request: Request, exc: DependencyError) -> JSONResponse:
    return _error_response(status.HTTP_409_CONFLICT, str(exc), HAS_DEPENDENCIES)


def not_found_error_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(
        status.HTTP_404_NOT_FOUND,
        str(exc),
        NOT_FOUND,
    )


def storage_fault_error_handler(
    request: Request, exc: StorageFaultError
) -> JSONResponse:
    # The diagnostic stays in the log; clients only get the generic message.
    logger.error(f"Storage fault on {request.method} {request.url.path}: {exc!r}")
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        STORAGE_FAULT_MESSAGE,
        STORAGE_UNAVAILABLE,
    )


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    app.add_exception_handler(DomainValidationError, domain_validation_error_handler)
    app.add_exception_handler(InvalidSizeError, invalid_size_error_handler)
    app.add_exception_handler(InvalidTypeError, invalid_type_error_handler)
    app.add_exception_handler(DuplicateResourceError, duplicate_resource_error_handler)
    app.add_exception_handler(BookingConflictError, booking_conflict_error_handler)
    app.add_exception_handler(DependencyError, dependency_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(StorageFaultError, storage_fault_error_handler)
