import enum
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"


STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.INTERNAL: 500,
}


class ServiceError(Exception):
    """Raised by the service layer; routes never inspect the message text."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class ValidationError(ServiceError):
    kind = ErrorKind.VALIDATION


class ConflictError(ServiceError):
    kind = ErrorKind.CONFLICT


class UnauthorizedError(ServiceError):
    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(ServiceError):
    kind = ErrorKind.FORBIDDEN


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def _service_error(request: Request, exc: ServiceError):
        if exc.kind is ErrorKind.INTERNAL:
            logger.error("internal error on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
