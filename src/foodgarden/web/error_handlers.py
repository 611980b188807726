import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from foodgarden.errors import AuthenticationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

HTTP_ERROR_TYPES = {
    400: "bad_request",
    401: "authentication_error",
    404: "not_found",
    405: "method_not_allowed",
}


def create_json_error_response(
    status_code: int, message: str, error_type: str | None = None, reason: str | None = None
) -> JSONResponse:
    """Create the `ok: false` error envelope with optional type and reason for machine parsing."""
    content: dict[str, Any] = {"ok": False, "message": message}
    if error_type:
        content["type"] = error_type
    if reason:
        content["reason"] = reason
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, AuthenticationError):
        return create_json_error_response(401, str(exc), "authentication_error", exc.reason)
    if isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    else:
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Report malformed path parameters or bodies as 400 validation errors."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    return create_json_error_response(status_code=400, message=message, error_type="validation_error")


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Wrap framework HTTP errors (unknown path, wrong method) in the error envelope."""
    if not isinstance(exc, StarletteHTTPException):
        return await general_exception_handler(request, exc)
    error_type = HTTP_ERROR_TYPES.get(exc.status_code, "http_error")
    response = create_json_error_response(status_code=exc.status_code, message=str(exc.detail), error_type=error_type)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def store_error_handler(_: Request, exc: Exception) -> Response:
    """Handle document store failures (500) with the operation's message."""
    logger.error("Store error: %s", exc, exc_info=exc.__cause__ or exc)
    return create_json_error_response(status_code=500, message=str(exc), error_type="store_error")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
