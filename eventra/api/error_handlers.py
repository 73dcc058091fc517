"""
Global exception handlers

Domain errors, HTTP errors and request validation errors are rendered in
the standard error envelope; anything else becomes a 500 without internal
details.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventra.core.errors import EventraError
from eventra.utils.responses import error_response

logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    413: "PAYLOAD_TOO_LARGE",
    429: "RATE_LIMITED",
}

def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app"""
    _register_domain_error_handler(app)
    _register_http_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)

def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(EventraError)
    async def eventra_error_handler(request: Request, exc: EventraError):
        log = logger.warning if exc.http_status < 500 else logger.error
        log(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        return error_response(
            message=exc.message,
            error_code=exc.error_code,
            details=exc.details,
            status_code=exc.http_status
        )

def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(
            message=str(exc.detail),
            error_code=HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
            status_code=exc.status_code
        )

def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return error_response(
            message="Invalid request data",
            error_code="VALIDATION_ERROR",
            details=[
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
        )

def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return error_response(
            message="An unexpected error occurred",
            error_code="INTERNAL_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
