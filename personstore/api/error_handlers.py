"""Error Handlers: global exception handlers for the person store API.

Invariants:
    - Every error response uses the PersonStoreError envelope (to_response())
    - Request validation failures name the first failing field by its stored spelling,
      the same "field" key DocumentValidationError carries
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (PersonStoreError), validation (Pydantic), catch-all (Exception)
    - 4xx domain errors logged as warnings, storage failures as errors
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from personstore.core.domain_types import wire_field
from personstore.core.errors import (
    DocumentValidationError, ErrorCategory, ErrorContext, ErrorSeverity, PersonStoreError,
)

logger = logging.getLogger(__name__)

# Request parts FastAPI prefixes onto error locations
_LOCATION_ROOTS = frozenset({"body", "query", "path", "header", "cookie"})


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_store_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _respond(exc: PersonStoreError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _register_store_error_handler(app: FastAPI) -> None:
    @app.exception_handler(PersonStoreError)
    async def store_error_handler(request: Request, exc: PersonStoreError):
        """Handle all person store domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return _respond(exc)


def _register_validation_error_handler(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Re-express request validation as a DocumentValidationError."""
        error = request_validation_error(exc)
        logger.warning(
            f"Request validation failed: {error.message}",
            extra={"error_code": error.code, "path": request.url.path},
        )
        response = error.to_response()
        response["error"]["details"] = [
            {"field": _field_of(e["loc"]), "message": e["msg"], "type": e["type"]}
            for e in exc.errors()
        ]
        return JSONResponse(status_code=error.http_status, content=response)


def _register_generic_error_handler(app: FastAPI) -> None:
    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return _respond(PersonStoreError(
            "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ErrorContext(operation=request.url.path),
        ))


def request_validation_error(exc: RequestValidationError) -> DocumentValidationError:
    """The first failing request field, in the same shape schema enforcement raises."""
    errors = exc.errors()
    if not errors:
        return DocumentValidationError("invalid request", "request")
    first = errors[0]
    return DocumentValidationError(first["msg"], _field_of(first["loc"]))


def _field_of(loc) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _LOCATION_ROOTS:
        parts = parts[1:]
    if not parts:
        return "request"
    parts[0] = wire_field(parts[0]) or parts[0]
    return ".".join(parts)
