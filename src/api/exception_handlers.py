"""Exception handlers for the FastAPI application.

Every error leaves the API as ``{error_code, message, details}``.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode

logger = structlog.get_logger()


def error_response(
    status_code: int, error_code: str, message: str, details: Any = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error_code": error_code, "message": message, "details": details},
    )


async def handle_app_exception(request: Request, exc: AppException) -> JSONResponse:
    logger.warning(
        "app_exception",
        path=request.url.path,
        error_code=exc.error_code.value,
        status_code=exc.status_code,
        message=exc.message,
    )
    return error_response(exc.status_code, exc.error_code.value, exc.message, exc.details)


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Log field-level errors; the client only gets a generic message."""
    fields = [
        {"field": ".".join(str(part) for part in err["loc"]), "type": err["type"]}
        for err in exc.errors()
    ]
    logger.info("validation_error", path=request.url.path, errors=fields)
    return error_response(400, ErrorCode.VALIDATION_ERROR.value, "Invalid request data")


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")
    logger.error(
        "unhandled_exception",
        error_type=type(exc).__name__,
        request_id=request_id,
        exc_info=exc,
    )
    message = "An unexpected error occurred" if settings.is_production else str(exc)
    return error_response(
        500, ErrorCode.INTERNAL_ERROR.value, message, {"request_id": request_id}
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""
    app.add_exception_handler(AppException, handle_app_exception)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected)
