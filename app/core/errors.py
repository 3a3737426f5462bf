# File: app/core/errors.py

"""
Error values for the places API.

Services return `Result[T, ApiError]`. Routes unwrap the result and raise
`ApiErrorException` for the error branch; `error_response` is the one
function that turns an ApiError into the `{"message": ...}` wire shape.
"""

from dataclasses import dataclass
from enum import Enum

from fastapi import status
from fastapi.responses import JSONResponse

from app.core.result import Err, Ok, Result

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred!"


class ErrorCode(str, Enum):
    VALIDATION = "validation"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    INTERNAL = "internal"


@dataclass(slots=True, frozen=True)
class ApiError:
    code: ErrorCode
    message: str
    status_code: int


type ApiResult[T] = Result[T, ApiError]


def validation_error(message: str) -> ApiError:
    return ApiError(ErrorCode.VALIDATION, message, status.HTTP_422_UNPROCESSABLE_ENTITY)


def auth_error(message: str, status_code: int = status.HTTP_401_UNAUTHORIZED) -> ApiError:
    """Identity failures use 401, permission failures 403."""
    return ApiError(ErrorCode.AUTH, message, status_code)


def not_found_error(message: str) -> ApiError:
    return ApiError(ErrorCode.NOT_FOUND, message, status.HTTP_404_NOT_FOUND)


def internal_error(message: str) -> ApiError:
    return ApiError(ErrorCode.INTERNAL, message, status.HTTP_500_INTERNAL_SERVER_ERROR)


class ApiErrorException(Exception):
    """Carries an ApiError from a route or dependency to the terminal handler."""

    def __init__(self, error: ApiError):
        super().__init__(error.message)
        self.error = error


def unwrap[T](result: ApiResult[T]) -> T:
    match result:
        case Ok(value=value):
            return value
        case Err(error=error):
            raise ApiErrorException(error)
        case _:
            raise ApiErrorException(internal_error("Unexpected result type."))


def error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"message": error.message or UNKNOWN_ERROR_MESSAGE},
    )
