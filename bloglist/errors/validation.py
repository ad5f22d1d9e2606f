"""Client input errors and the handlers that translate them to 400/404 responses."""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_405_METHOD_NOT_ALLOWED,
)

from bloglist.errors.base import BaseAppError, create_exception_handler, error_response
from bloglist.utils.helpers import file_logger, host

logger = file_logger(getLogger(__name__))

UNKNOWN_ENDPOINT = "unknown endpoint"


class MalformedIdError(BaseAppError):
    """Raised when a path identifier cannot be parsed."""

    def __init__(self, detail: str = "malformatted id") -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class SchemaValidationError(BaseAppError):
    """Raised when a request body fails field validation."""

    def __init__(self, detail: str = "Validation failed") -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


validation_error_handler = create_exception_handler(logger)


def format_request_errors(exc: RequestValidationError) -> str:
    """
    Flatten pydantic request errors into one message.

    Args:
        exc: The RequestValidationError raised while parsing the request.

    Returns:
        Message of the form ``field: reason, field: reason``.
    """
    parts = []
    for error in exc.errors():
        # Skip the leading 'body' / 'path' location segment
        loc = [str(segment) for segment in error.get("loc", [])[1:]]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {error.get('msg', 'Invalid value')}")
    return ", ".join(parts)


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle request parsing errors with the same 400 shape as schema validation.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with the flattened validation message.
    """
    detail = format_request_errors(cast(RequestValidationError, exc))

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {detail}",
    )

    return error_response(detail, HTTP_400_BAD_REQUEST)


async def http_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Render framework HTTP errors; unmatched routes and methods become `unknown endpoint`."""
    http_exc = cast(StarletteHTTPException, exc)
    if http_exc.status_code in (HTTP_404_NOT_FOUND, HTTP_405_METHOD_NOT_ALLOWED):
        logger.warning(f"Unknown endpoint {request.method} {request.url.path} from {host(request)}")
        return error_response(UNKNOWN_ENDPOINT, HTTP_404_NOT_FOUND)

    response = error_response(str(http_exc.detail), http_exc.status_code)
    if http_exc.headers:
        response.headers.update(http_exc.headers)
    return response
