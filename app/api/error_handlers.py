# File: app/api/error_handlers.py

"""
Terminal error handlers.

Every failed request ends here. If the request had already stored an
uploaded image, that file is discarded first (best effort), then the error
is written as `{"message": ...}` with its status code.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import (
    UNKNOWN_ERROR_MESSAGE,
    ApiError,
    ApiErrorException,
    ErrorCode,
    error_response,
    internal_error,
    validation_error,
)
from app.services.uploads import discard_file

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid inputs passed, please check your data."
ROUTE_NOT_FOUND_MESSAGE = "Could not find this route."


def _discard_request_upload(request: Request) -> None:
    # set by the upload dependency once a file has been written to disk
    path = getattr(request.state, "uploaded_file", None)
    if path:
        discard_file(path)


async def api_error_handler(request: Request, exc: ApiErrorException) -> JSONResponse:
    _discard_request_upload(request)
    return error_response(exc.error)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug(f"Request validation failed: {exc.errors()}")
    _discard_request_upload(request)
    return error_response(validation_error(INVALID_INPUT_MESSAGE))


def http_error(status_code: int, detail: object) -> ApiError:
    """ApiError for an HTTPException raised by the framework (routing, methods)."""
    if status_code == status.HTTP_404_NOT_FOUND:
        return ApiError(ErrorCode.NOT_FOUND, ROUTE_NOT_FOUND_MESSAGE, status_code)
    message = str(detail) if detail else UNKNOWN_ERROR_MESSAGE
    if status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
        return ApiError(ErrorCode.BAD_REQUEST, message, status_code)
    return ApiError(ErrorCode.INTERNAL, message, status_code)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    _discard_request_upload(request)
    response = error_response(http_error(exc.status_code, exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error: {exc}")
    _discard_request_upload(request)
    return error_response(internal_error(UNKNOWN_ERROR_MESSAGE))


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiErrorException, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
