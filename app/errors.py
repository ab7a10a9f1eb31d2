"""Error taxonomy and the handlers that render it as the JSON envelope.

Services raise :class:`IssueTrackerError` subclasses; the handlers below turn
them into ``{"success": false, "message": ..., "error": ...}`` responses.
Unexpected exceptions are logged in full server-side and the client only
sees a generic message.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class IssueTrackerError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(IssueTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class AuthError(IssueTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "auth_error"


class ForbiddenError(IssueTrackerError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class NotFoundError(IssueTrackerError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ConflictError(IssueTrackerError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class InternalError(IssueTrackerError):
    pass


def error_payload(message: str, code: str) -> dict:
    return {"success": False, "message": message, "error": code}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(IssueTrackerError)
    async def issue_tracker_error_handler(request: Request, exc: IssueTrackerError):
        if isinstance(exc, InternalError):
            logger.error(
                f"Internal error on {request.method} {request.url.path}: {exc.message}",
                extra={"path": request.url.path},
            )
            return JSONResponse(
                status_code=exc.status_code,
                content=error_payload("Internal server error", exc.code),
            )

        logger.info(
            f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
            extra={"path": request.url.path, "status_code": exc.status_code},
        )
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(exc.message, exc.code),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.info(
            f"Rejected request body on {request.method} {request.url.path}",
            extra={"errors": errors},
        )
        message = "Invalid request"
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else first.get("msg", message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_payload(message, ValidationError.code),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = f"Route {request.url.path} not found"
            code = NotFoundError.code
        else:
            message = str(exc.detail)
            code = "http_error"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(message, code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            f"Unhandled error on {request.method} {request.url.path}: {exc}",
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_payload("Internal server error", InternalError.code),
        )
