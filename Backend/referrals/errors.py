# awesome-referrals/backend/referrals/errors.py

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Base class for errors that map directly onto an HTTP response.
    4xx errors are reported with status 'fail', everything else with 'error'.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


def error_body(status_code: int, message: str) -> dict:
    return {
        "status": "fail" if 400 <= status_code < 500 else "error",
        "message": message,
    }


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    err = errors[0]
    # loc looks like ("body", "email") or ("query", "page")
    field = ".".join(str(part) for part in err.get("loc", ())[1:])
    if err.get("type") == "missing":
        return f"Please provide {field}" if field else "Please provide all required fields"
    return f"Invalid value for {field}: {err.get('msg')}" if field else err.get("msg", "Invalid request")


def register_exception_handlers(app: FastAPI) -> None:
    """Converts every error leaving a route into the flat {status, message} body."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(status.HTTP_400_BAD_REQUEST, _first_validation_message(exc)),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
        message = str(exc) if settings.APP_ENV == "dev" else "Something went wrong"
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body(500, message))
