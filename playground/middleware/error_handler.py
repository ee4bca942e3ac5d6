# playground/middleware/error_handler.py
# Structured error handling for the FastAPI app
# Maps application and store errors to one JSON error envelope

import asyncio
import logging
import traceback
from typing import Callable

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from playground.store.errors import (
    ShareDecodeError,
    ShareNotFoundError,
    StoreError,
    UnknownStoreProviderError,
)
from playground.utils.logger import log_exception

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error with structured response."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: dict = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}


class ValidationError(AppError):
    """Request validation failed."""
    def __init__(self, message: str = "Validation failed", details: dict = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
            details=details
        )


class NotFoundError(AppError):
    """Resource not found."""
    def __init__(self, message: str = "Resource not found", details: dict = None):
        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details=details
        )


class ProviderNotFoundError(NotFoundError):
    """Request named a store provider that does not exist."""
    def __init__(self, provider: str):
        super().__init__(
            message=f"Unknown store provider '{provider}'",
            details={"provider": provider}
        )
        self.error_code = "PROVIDER_NOT_FOUND"


class StoreUnavailableError(AppError):
    """A store provider failed or timed out."""
    def __init__(self, message: str = "Store provider unavailable", details: dict = None):
        super().__init__(
            message=message,
            error_code="STORE_ERROR",
            status_code=503,
            details=details
        )


def to_app_error(exc: Exception) -> AppError:
    """Translate store-layer failures into their HTTP-facing AppError."""
    if isinstance(exc, AppError):
        return exc
    if isinstance(exc, ShareNotFoundError):
        return NotFoundError(str(exc), details={"provider": exc.provider_id.value})
    if isinstance(exc, ShareDecodeError):
        return ValidationError(str(exc), details={"provider": exc.provider_id.value})
    if isinstance(exc, UnknownStoreProviderError):
        return ProviderNotFoundError(str(exc.provider_id))
    if isinstance(exc, asyncio.TimeoutError):
        return StoreUnavailableError("Store provider timed out")
    if isinstance(exc, StoreError):
        return StoreUnavailableError(str(exc))
    if isinstance(exc, (RedisError, SQLAlchemyError, ConnectionError)):
        return StoreUnavailableError(details={"type": type(exc).__name__})
    return AppError("An internal error occurred. Please try again later.")


def create_error_response(
    error_code: str,
    message: str,
    status_code: int,
    details: dict = None,
    request_id: str = None
) -> JSONResponse:
    """Create a standardized JSON error response."""
    content = {
        "error": {
            "code": error_code,
            "message": message,
        }
    }

    if details:
        content["error"]["details"] = details

    if request_id:
        content["error"]["request_id"] = request_id

    return JSONResponse(status_code=status_code, content=content)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches all unhandled exceptions and returns
    consistent JSON error responses.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get("X-Request-ID", str(id(request)))

        try:
            return await call_next(request)

        except HTTPException as e:
            logger.warning(
                f"HTTPException: {e.status_code} - {e.detail}",
                extra={"request_id": request_id, "path": request.url.path}
            )
            return create_error_response(
                error_code="HTTP_ERROR",
                message=str(e.detail),
                status_code=e.status_code,
                request_id=request_id
            )

        except Exception as e:
            err = to_app_error(e)
            if err.status_code >= 500:
                log_exception(e, context=f"Unhandled error on {request.url.path}")
            else:
                logger.warning(
                    f"AppError: {err.error_code} - {err.message}",
                    extra={"request_id": request_id, "path": request.url.path}
                )
            details = err.details
            if self.debug and err.status_code >= 500:
                details = {
                    **details,
                    "type": type(e).__name__,
                    "traceback": traceback.format_exc(),
                }
            return create_error_response(
                error_code=err.error_code,
                message=err.message,
                status_code=err.status_code,
                details=details,
                request_id=request_id
            )


def setup_exception_handlers(app):
    """Register exception handlers on FastAPI app."""

    async def app_error_handler(request: Request, exc: Exception):
        err = to_app_error(exc)
        if err.status_code >= 500:
            log_exception(exc, context=f"Error on {request.url.path}")
        return create_error_response(
            error_code=err.error_code,
            message=err.message,
            status_code=err.status_code,
            details=err.details
        )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StoreError, app_error_handler)
    app.add_exception_handler(asyncio.TimeoutError, app_error_handler)
    app.add_exception_handler(RedisError, app_error_handler)
    app.add_exception_handler(SQLAlchemyError, app_error_handler)
    app.add_exception_handler(ConnectionError, app_error_handler)
