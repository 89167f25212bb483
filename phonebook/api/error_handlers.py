"""Error Handlers — global exception handlers for the phonebook API.

Invariants:
    - StorageError → matched exhaustively on StorageErrorKind
      (CAST, VALIDATION, CONFLICT → 400 {"error": ...}; UNAVAILABLE → generic 500)
    - PhonebookError → {"error": message} with the error's http_status
    - RequestValidationError → 400 {"error": description of the bad input}
    - Unmatched path or method → 404 {"error": "unknown endpoint"}
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Extracted from main.py; create_app calls register_error_handlers once
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from phonebook.core.errors import (
    DuplicateNameError,
    MalformedIdError,
    PersonValidationError,
    PhonebookError,
    StorageError,
    StorageErrorKind,
    UnknownEndpointError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_storage_error_handler(app)
    _register_phonebook_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def map_storage_error(exc: StorageError) -> PhonebookError | None:
    """Translate a storage failure into its API error, or None when unclassified."""
    match exc.kind:
        case StorageErrorKind.CAST:
            return MalformedIdError()
        case StorageErrorKind.VALIDATION:
            return PersonValidationError(exc.message)
        case StorageErrorKind.CONFLICT:
            return DuplicateNameError()
        case StorageErrorKind.UNAVAILABLE:
            return None


def _error_response(request: Request, error: PhonebookError) -> JSONResponse:
    logger.warning(
        f"{error.code}: {error.message}",
        extra={"error_code": error.code, "path": request.url.path},
    )
    return JSONResponse(
        status_code=error.http_status, content=error.to_response(),
    )


def _internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=exc,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": INTERNAL_ERROR_MESSAGE},
    )


def _register_storage_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        """Map recognised storage failures to 400; forward the rest to the 500 fallback."""
        error = map_storage_error(exc)
        if error is None:
            return _internal_error_response(request, exc)
        return _error_response(request, error)


def _register_phonebook_error_handler(app: FastAPI) -> None:

    @app.exception_handler(PhonebookError)
    async def phonebook_error_handler(request: Request, exc: PhonebookError):
        return _error_response(request, exc)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register request validation error handler (malformed body)."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": describe_validation_errors(exc)},
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Unmatched routes surface from the router as 404/405 HTTPExceptions."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return _error_response(request, UnknownEndpointError())
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        return _internal_error_response(request, exc)


def describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one message: `body.name: Input should be a valid string`."""
    return "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    )
