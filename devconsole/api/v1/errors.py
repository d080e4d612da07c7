"""Translate data-access results into HTTP errors."""

from typing import TypeVar

from fastapi import HTTPException, status

from devconsole.services.result import ErrorKind, Result

T = TypeVar("T")

STATUS_BY_ERROR = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INACTIVE: status.HTTP_403_FORBIDDEN,
    ErrorKind.STORE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def unwrap(result: Result[T]) -> T | None:
    """Return the result's value, or raise the HTTPException matching its error kind."""
    if result.ok:
        return result.value
    raise HTTPException(
        status_code=STATUS_BY_ERROR[result.error],
        detail=result.message or result.error.value,
    )
