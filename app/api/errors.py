"""Exception handlers for the catalog API.

Every failure leaves the service in the same envelope:
``{"success": false, "error": <category>, "message": <detail>}``.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.schemas import ErrorResponse
from app.domain.exceptions import CatalogError, ValidationError

logger = structlog.get_logger()

REQUEST_LOCATIONS = {"body", "query", "path", "header"}


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    """Build an error envelope response."""
    content = ErrorResponse(error=error, message=message).model_dump()
    return JSONResponse(status_code=status_code, content=content)


def format_validation_errors(errors: list[dict[str, Any]]) -> str:
    """Join request validation errors into one message.

    Args:
        errors: Errors as reported by ``RequestValidationError.errors()``.

    Returns:
        ``"field: reason"`` entries separated by semicolons.
    """
    parts = []
    for error in errors:
        loc = [str(p) for p in error.get("loc", ())]
        if loc and loc[0] in REQUEST_LOCATIONS:
            loc = loc[1:]
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        parts.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return "; ".join(parts)


def setup_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """Register the envelope-producing exception handlers.

    Args:
        app: FastAPI application instance.
        debug: Expose unexpected error messages in 500 responses.
    """

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        """Handle catalog errors with their own status and category."""
        if exc.status_code >= 500:
            logger.error("Catalog error", path=request.url.path, error=exc.message)
        return error_response(exc.status_code, exc.category, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle malformed bodies and query parameters as 400s."""
        message = format_validation_errors(list(exc.errors()))
        logger.info("Request validation failed", path=request.url.path, errors=message)
        return error_response(status.HTTP_400_BAD_REQUEST, ValidationError.category, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle routing errors with the envelope."""
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            return error_response(
                exc.status_code,
                "Route not found",
                f"The requested route {request.url.path} does not exist.",
            )
        return error_response(exc.status_code, str(exc.detail), str(exc.detail))

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        """Handle constraint violations that escaped the repositories."""
        logger.warning("Integrity error", path=request.url.path, error=str(exc.orig))
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Unique constraint violation",
            "A record with this data already exists.",
        )

    @app.exception_handler(NoResultFound)
    async def no_result_handler(request: Request, exc: NoResultFound) -> JSONResponse:
        """Handle lookups that expected exactly one row."""
        return error_response(
            status.HTTP_404_NOT_FOUND,
            "Record not found",
            "The requested record does not exist.",
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle uncaught exceptions with consistent format."""
        logger.exception(
            "Unhandled exception in handler",
            path=request.url.path,
            method=request.method,
            error=str(exc),
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            CatalogError.category,
            str(exc) if debug else "Something went wrong.",
        )
