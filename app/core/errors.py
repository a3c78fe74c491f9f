"""Domain errors and the single top-level handler that maps them to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND_MESSAGE = "Route does not exist"
GENERIC_SERVER_ERROR_MESSAGE = "Something went wrong, try again later"


class AppError(Exception):
    """Base for errors raised by flow logic; carries a client-safe message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DuplicateCredentialError(AppError):
    """Registration with an email that already has an account."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCredentialsError(AppError):
    """Login failed. Same error for unknown email and wrong password."""

    status_code = status.HTTP_401_UNAUTHORIZED


class FileValidationError(AppError):
    """Upload batch rejected (non-image file, too many files, file too large)."""

    status_code = status.HTTP_400_BAD_REQUEST


class StorageFailureError(AppError):
    """Writing or reading image bytes or metadata failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error-kind -> status mapping to the app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                extra={
                    "path": request.url.path,
                    "error_kind": type(exc).__name__,
                    "reason": exc.message[:500],
                },
            )
        return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"msg": ROUTE_NOT_FOUND_MESSAGE},
            )
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"msg": GENERIC_SERVER_ERROR_MESSAGE},
        )
