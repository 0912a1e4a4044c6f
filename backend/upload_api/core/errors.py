import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class UploadError(Exception):
    """Terminal request failure rendered as ``{"error": ...}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: str | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class MethodNotAllowed(UploadError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    default_message = "Method not allowed"


class Unauthenticated(UploadError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Missing authorization header"


class InvalidRequest(UploadError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required fields: bucket, path, contentType"


class UnsupportedMediaType(UploadError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid content type"


class ServerMisconfiguration(UploadError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server configuration error"


class InternalError(UploadError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to generate upload URL"


def _error_response(exc: UploadError) -> JSONResponse:
    content: dict[str, str] = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


async def upload_error_handler(request: Request, exc: UploadError) -> JSONResponse:
    return _error_response(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        response = _error_response(MethodNotAllowed())
        response.headers.update(getattr(exc, "headers", None) or {})
        return response
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while generating upload URL")
    return _error_response(InternalError(details=str(exc)))
