"""
Global Exception Handlers for the Pixel Beacon service

Error Response Format (5xx and unexpected 4xx):
{
    "error": {
        "status_code": 500,
        "error_code": "STORE_WRITE_FAILED",
        "message": "Failed to record view",
        "type": "Internal Server Error",
        "path": "/pixel.gif"
    }
}

A rejected beacon fetch is answered with a bare 403 and an empty body.
Storage details are only ever written to the server log.
"""

import logging
from typing import Any

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from beacon.exceptions import BeaconError, ErrorCode, StoreError, ValidationRejectedError

logger = logging.getLogger(__name__)


def create_error_response(
    status_code: int,
    message: str,
    error_code: str | ErrorCode | None = None,
    path: str | None = None,
) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        status_code: HTTP status code
        message: Human-readable error message
        error_code: Machine-readable error code
        path: Request path that caused the error

    Returns:
        JSONResponse with standardized error format
    """
    error_response: dict[str, Any] = {
        "error": {
            "status_code": status_code,
            "message": message,
            "type": get_error_type(status_code),
        }
    }

    if error_code:
        error_response["error"]["error_code"] = error_code.value if isinstance(error_code, ErrorCode) else error_code

    if path:
        error_response["error"]["path"] = path

    return JSONResponse(status_code=status_code, content=error_response)


def get_error_type(status_code: int) -> str:
    """Get a human-readable error type based on status code."""
    error_types = {
        400: "Bad Request",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        500: "Internal Server Error",
        503: "Service Unavailable",
    }
    return error_types.get(status_code, "Error")


def get_http_error_code(status_code: int) -> str:
    """Map HTTP status codes to error codes for HTTPException."""
    error_code_map = {
        403: ErrorCode.BEACON_REJECTED.value,
        404: ErrorCode.RESOURCE_NOT_FOUND.value,
        405: ErrorCode.METHOD_NOT_ALLOWED.value,
        500: ErrorCode.INTERNAL_ERROR.value,
    }
    return error_code_map.get(status_code, ErrorCode.UNKNOWN_ERROR.value)


async def beacon_exception_handler(request: Request, exc: BeaconError) -> Response:
    """
    Handle beacon exceptions.

    Rejections are an expected outcome and are logged at INFO; store
    failures are logged as errors with the underlying cause attached.
    """
    if isinstance(exc, ValidationRejectedError):
        logger.info(
            f"Rejected beacon fetch: {exc.message}",
            extra={"path": request.url.path, "status_code": exc.status_code, "details": exc.details},
        )
        return Response(status_code=exc.status_code)

    logger.error(
        f"{type(exc).__name__}: {exc.message}",
        exc_info=(type(exc.__cause__), exc.__cause__, exc.__cause__.__traceback__) if exc.__cause__ else None,
        extra={
            "status_code": exc.status_code,
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    # Store errors never echo their details to the caller
    message = exc.message if isinstance(exc, StoreError) else "An unexpected error occurred."
    return create_error_response(
        status_code=exc.status_code,
        message=message,
        error_code=exc.error_code,
        path=request.url.path,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle standard HTTP exceptions (unknown paths, wrong methods)."""
    logger.warning(
        f"HTTPException: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    return create_error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        error_code=get_http_error_code(exc.status_code),
        path=request.url.path,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Returns a generic error message; internal details are not exposed.
    """
    logger.error(
        f"Unhandled exception: {str(exc)}",
        exc_info=True,
        extra={"path": request.url.path, "method": request.method},
    )

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="An unexpected error occurred. Please try again later.",
        error_code=ErrorCode.INTERNAL_ERROR,
        path=request.url.path,
    )


def register_exception_handlers(app) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(BeaconError, beacon_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Catch-all for unexpected exceptions
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.info("Exception handlers registered successfully")
